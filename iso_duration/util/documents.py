""" Load and dump pydantic models as JSON or YAML documents """
from typing import Literal, TypeVar
from pathlib import Path
from loguru import logger
import yaml
from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)
DocumentFormat = Literal["json", "yaml"]

_SUFFIX_FORMATS: dict[str, DocumentFormat] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def load_document(model: type[M], text: str, format: DocumentFormat = "json") -> M:
    """
    Validate a JSON or YAML document as `model`. A field that fails to decode, such as a malformed
    duration, fails the whole document with a pydantic ValidationError.
    """
    logger.debug(f"Loading {model.__name__} from {format} document")
    if format == "json":
        return model.model_validate_json(text)
    elif format == "yaml":
        return model.model_validate(yaml.safe_load(text))
    else:
        raise ValueError(f"Unknown document format {format!r}")


def dump_document(instance: BaseModel, format: DocumentFormat = "json") -> str:
    logger.debug(f"Dumping {type(instance).__name__} as {format} document")
    if format == "json":
        return instance.model_dump_json()
    elif format == "yaml":
        return yaml.safe_dump(instance.model_dump(mode = 'json'), sort_keys = False)
    else:
        raise ValueError(f"Unknown document format {format!r}")


def load_document_file(model: type[M], path: Path) -> M:
    """ Load a `.json`, `.yaml` or `.yml` file, picking the format from the suffix """
    path = Path(path)
    format = _SUFFIX_FORMATS.get(path.suffix.lower())
    if not format:
        raise ValueError(f"Can't determine document format of {str(path)!r}")
    return load_document(model, path.read_text(), format)
