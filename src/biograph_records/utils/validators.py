"""Input validation for BioGraph Records.

Validates:
- CURIE format
- Raw/frozen record shapes (subject, object, derivable predicate)
- Packed record batches
"""

from typing import Any, Mapping
import re


class ValidationError(Exception):
    """Raised when input validation fails."""

    pass


def validate_curie(curie: str) -> bool:
    """Check if string is a valid CURIE format.

    Args:
        curie: String to validate

    Returns:
        True if valid CURIE format
    """
    if not isinstance(curie, str):
        return False
    # Basic pattern: prefix:id
    pattern = r"^[A-Za-z]+[A-Za-z0-9_\.]*:[A-Za-z0-9_\-\.]+$"
    return bool(re.match(pattern, curie))


def validate_record_shape(record: Any, has_association: bool = False) -> Mapping[str, Any]:
    """Check that a record satisfies the minimum constructible shape.

    Args:
        record: Raw, frozen, or minimal record mapping
        has_association: Whether an explicit Association will be supplied
            (in which case the predicate does not need to be on the record)

    Returns:
        The record, unchanged

    Raises:
        ValidationError: If subject/object are missing or no predicate can be derived
    """
    if not isinstance(record, Mapping):
        raise ValidationError(f"Record must be a mapping, got {type(record).__name__}")

    for role in ("subject", "object"):
        node = record.get(role)
        if node is None:
            raise ValidationError(f"Record is missing its {role}")
        if not isinstance(node, Mapping):
            raise ValidationError(f"Record {role} must be a mapping, got {type(node).__name__}")

    if not has_association:
        predicate = record.get("predicate")
        if not predicate or not isinstance(predicate, str):
            raise ValidationError(
                "Record has no predicate and no association was supplied to derive one from"
            )

    return record


def validate_record_package(package: Any) -> None:
    """Validate a packed record batch.

    Expected layout: ``[associations, frozen_record_0, frozen_record_1, ...]``
    where each frozen record carries an ``apiEdge`` index into ``associations``.

    Args:
        package: Output of ``Record.pack_records``

    Raises:
        ValidationError: If the package layout or any index is invalid
    """
    if not isinstance(package, (list, tuple)) or not package:
        raise ValidationError("Record package must be a non-empty list")

    associations = package[0]
    if not isinstance(associations, (list, tuple)):
        raise ValidationError("First element of a record package must be the association list")

    for i, frozen in enumerate(package[1:]):
        if not isinstance(frozen, Mapping):
            raise ValidationError(f"Packed record {i} must be a mapping")
        index = frozen.get("apiEdge")
        # bool is an int subclass
        if not isinstance(index, int) or isinstance(index, bool):
            raise ValidationError(f"Packed record {i} has no integer apiEdge index")
        if not 0 <= index < len(associations):
            raise ValidationError(
                f"Packed record {i} references association {index}, "
                f"but only {len(associations)} are present"
            )
