"""
Uploaded document value type and validation.

Validation runs before any provider call so bad input never creates
remote resources.

Dependencies: None
System role: Input validation for provisioning and add-files operations
"""

from dataclasses import dataclass
from typing import Sequence

from docchat.core.exceptions import ValidationError

# Mirrors the file picker of the upload form
ALLOWED_EXTENSIONS = ("pdf", "txt", "doc", "docx", "md")


@dataclass(frozen=True)
class UploadedDocument:
    """A document received from the client, ready to forward to the provider."""

    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def validate_filename(filename: str) -> None:
    """
    Validate filename for security and allowed extensions.

    Args:
        filename: Original filename from user

    Raises:
        ValidationError: If filename is invalid or not allowed
    """
    if not filename or len(filename) > 255:
        raise ValidationError("Invalid filename length", field="files")

    # Block path traversal attacks
    if ".." in filename or "/" in filename or "\\" in filename:
        raise ValidationError("Invalid filename: path traversal detected", field="files")

    if "." not in filename:
        raise ValidationError(f"File must have an extension: {filename}", field="files")

    ext = filename.rsplit(".", 1)[-1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"File type '.{ext}' not allowed. Allowed: {', '.join(ALLOWED_EXTENSIONS)}",
            field="files",
        )


def validate_documents(documents: Sequence[UploadedDocument]) -> None:
    """
    Validate a batch of uploaded documents.

    Raises:
        ValidationError: If the batch is empty or any filename is rejected
    """
    if not documents:
        raise ValidationError("No files were uploaded.", field="files")
    for document in documents:
        validate_filename(document.filename)
