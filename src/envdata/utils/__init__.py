from envdata.utils.logging_config import configure_logging
from envdata.utils.parsing import parse_encoded_list

__all__ = [
    "configure_logging",
    "parse_encoded_list",
]
