"""Structural checks on a parsed Document."""

from collections import Counter

from returns.result import Failure, Result, Success

from ..core.validate import ValidationError, ValidationResult
from ..models.document import Document


class DocumentValidator:
    """Cross-section consistency checks the per-section parsers cannot make."""

    @staticmethod
    def validate(document: Document) -> None:
        """
        Validate a document.

        Raises:
            ValidationError: On duplicate screen codes or screen queries
                referencing undeclared queries
        """
        counts = Counter(screen.screen_code for screen in document.screens)
        duplicates = sorted(code for code, n in counts.items() if n > 1)
        if duplicates:
            raise ValidationError(f"Duplicate screen codes: {', '.join(duplicates)}")

        known = {query.code for query in document.queries}
        unknown = sorted({
            sq.query_code for sq in document.screen_queries if sq.query_code and sq.query_code not in known
        })
        if unknown:
            raise ValidationError(f"Screen queries reference unknown queries: {', '.join(unknown)}")


def validate_document(document: Document) -> Result[None, ValidationResult]:
    """
    Validate a document (Result pattern version).

    Returns:
        Result indicating success or the first validation error
    """
    try:
        DocumentValidator.validate(document)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field="document"))


__all__ = ["DocumentValidator", "validate_document"]
