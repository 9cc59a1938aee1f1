# catalog_api/routers/forms.py
from fastapi import UploadFile


def present_fields(**values: str | None) -> dict[str, str]:
    """
    Keep only form fields that were actually filled in.

    Multipart clients send every input of an edit form, including the empty
    ones; an omitted field and a blank one both mean "leave unchanged".
    """
    return {
        name: value
        for name, value in values.items()
        if value is not None and value.strip() != ""
    }


def read_uploads(files: list[UploadFile] | None) -> list[tuple[str | None, bytes]]:
    """
    Read uploaded files into (content_type, bytes) pairs.

    Browsers submit an empty part when no file was chosen; those are skipped.
    """
    uploads: list[tuple[str | None, bytes]] = []
    for f in files or []:
        if not f.filename:
            continue
        uploads.append((f.content_type, f.file.read()))
    return uploads
