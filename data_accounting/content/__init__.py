from data_accounting.content.file_verification import FileVerificationContent

__all__ = ["FileVerificationContent"]
