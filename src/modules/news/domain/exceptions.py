"""News domain exceptions."""

from src.core.domain.exceptions import EntityNotFoundError


class ArticleNotFoundError(EntityNotFoundError):
    """Raised when no article in the current result set has the given id."""

    def __init__(self, article_id: str):
        super().__init__("Article", article_id, details={"id": article_id})
