from pprint import pformat

from ._config import get_config


def source_repr(source: object) -> str:
    text = pformat(source, depth=2, compact=True).replace("\n", "")
    limit = get_config().repr_max_chars
    return text if len(text) <= limit else f"{text[: max(limit - 3, 0)]}..."
