"""Front matter parsing and validation."""

import yaml
from loguru import logger
from pydantic import ValidationError

from postnotes.domain.note import Properties
from postnotes.errors import MetadataError

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class FrontMatterLoader(yaml.SafeLoader):
    """Safe YAML loader that keeps dates and timestamps exactly as written."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_properties(raw_block: str, *, public_field: str = "public") -> Properties | None:
    """Parse the YAML front matter of a note into Properties.

    Args:
        raw_block: The YAML text between the two ``---`` marker lines
        public_field: Front matter key that holds the public flag

    Returns:
        The validated properties, or None if the note is private.

    Raises:
        MetadataError: If the block is not a YAML mapping or a required
            field is missing or has the wrong type.
    """
    try:
        data = yaml.load(raw_block, Loader=FrontMatterLoader)
    except yaml.YAMLError as err:
        raise MetadataError(f"Front matter is not valid YAML: {err}") from err

    if not isinstance(data, dict):
        raise MetadataError("Front matter must be a mapping of keys to values")

    if public_field != "public":
        data = {key: value for key, value in data.items() if key != "public"}
        if public_field in data:
            data["public"] = data.pop(public_field)

    # Private notes are discarded before the rest of the block is validated
    if data.get("public") is False:
        return None

    try:
        properties = Properties.model_validate(data)
    except ValidationError as err:
        fields = ", ".join(".".join(str(part) for part in e["loc"]) for e in err.errors())
        raise MetadataError(f"Invalid front matter ({fields}): {err}") from err

    if not properties.public:
        return None

    logger.debug(f"Parsed front matter for {properties.title!r}")
    return properties
