class DuplicateEmailError(Exception):
    """Registration attempted with an email that already has an account."""

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message)


class InvalidCredentialsError(Exception):
    """Unknown email or wrong password; deliberately indistinguishable."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class LogNotFoundError(Exception):
    """No log row matches both the id and the caller's user id."""

    def __init__(self, message: str = "Log not found"):
        super().__init__(message)


class NutritionServiceUnavailable(Exception):
    def __init__(self, message: str = "Nutrition search is not configured"):
        super().__init__(message)
