# files/naming.py

from rest_framework.exceptions import ValidationError

FORBIDDEN_CHARACTERS = ('/', '\\', '\x00')


def validate_filename(filename: str) -> str:
    """
    Rejects names that could escape the storage directory.
    The name is never rewritten, so title + ext always reproduces it.
    """
    if not filename or not filename.strip():
        raise ValidationError({"file": "A filename is required."})
    if filename in ('.', '..'):
        raise ValidationError({"file": f"'{filename}' is not a valid filename."})
    if any(ch in filename for ch in FORBIDDEN_CHARACTERS):
        raise ValidationError({"file": "Filenames must not contain path separators or NUL bytes."})
    return filename


def split_filename(filename: str) -> tuple[str, str]:
    """
    Splits at the last dot: 'report.pdf' -> ('report', '.pdf'),
    'README' -> ('README', ''), '.env' -> ('', '.env').
    """
    dot = filename.rfind('.')
    if dot == -1:
        return filename, ''
    return filename[:dot], filename[dot:]
