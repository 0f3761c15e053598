"""Planet domain exceptions."""

from src.core.domain.exceptions import EntityNotFoundError, ValidationError
from src.modules.planets.domain.entities import BodyCategory


class InvalidBodyNameError(ValidationError):
    """Raised when a body name fails the allow-list pattern."""

    error = "Invalid body name"

    def __init__(self, body_name: str):
        super().__init__(
            "Body name must contain only letters, numbers, spaces, hyphens, "
            "and parentheses"
        )
        self.body_name = body_name


class InvalidCategoryError(ValidationError):
    """Raised when an unknown body category is requested."""

    error = "Invalid category"

    def __init__(self, category: str):
        super().__init__(
            f"Unknown category '{category}'",
            details={"validCategories": [c.value for c in BodyCategory]},
        )


class PlanetNotFoundError(EntityNotFoundError):
    """Raised when neither position nor profile is available."""

    def __init__(self, body_name: str):
        super().__init__("Planet", body_name)
