# backend/consult_copilot/core/errors.py


class ConsultationError(Exception):
    """Base class for errors local to a single consultation."""


class EmptyInputError(ConsultationError):
    """A transcript submission was blank after trimming."""

    def __init__(self, message: str = "Transcript text is empty"):
        super().__init__(message)


class NoActivePatientError(ConsultationError):
    """An evaluation or summary was requested without a started consultation."""

    def __init__(self, message: str = "No active consultation"):
        super().__init__(message)


class ConsultationNotFoundError(NoActivePatientError):
    def __init__(self, consultation_id: str):
        self.consultation_id = consultation_id
        super().__init__(f"Consultation not found: {consultation_id}")


class ConsultationBusyError(ConsultationError):
    def __init__(self, consultation_id: str):
        self.consultation_id = consultation_id
        super().__init__(f"Consultation {consultation_id} is still processing")


class PatientNotFoundError(ConsultationError):
    def __init__(self, patient_id: int):
        self.patient_id = patient_id
        super().__init__(f"Patient not found: {patient_id}")
