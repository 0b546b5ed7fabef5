class UserctlError(Exception):
    """Base class for failures surfaced to the process boundary."""
    exit_code = 1


class UsageError(UserctlError):
    exit_code = 2


class SecretInputError(UserctlError):
    pass


class EmptySecretError(SecretInputError):
    def __init__(self, message: str = "empty passwords are not permitted"):
        super().__init__(message)


class MultilineSecretError(SecretInputError):
    def __init__(self, message: str = "multiline passwords are not permitted"):
        super().__init__(message)


class HashingError(UserctlError):
    pass


class BackendError(UserctlError):
    pass


class SecretTooLongError(SecretInputError):
    def __init__(self, limit: int):
        super().__init__(f"piped password exceeds {limit} bytes")
