"""
Header field proof bundles.
"""
from .header_proof import (
    MAX_FIELD_INDEX,
    field_index,
    generate_header_proof,
    verify_header_field,
    verify_bundle,
)

__all__ = [
    "MAX_FIELD_INDEX",
    "field_index",
    "generate_header_proof",
    "verify_header_field",
    "verify_bundle",
]
