# Common utilities
from .config_loader import (
    get_config_path,
    load_config,
    load_yaml_file,
    save_yaml_file,
)
from .log_config import setup_logging
from .text_utils import sanitize_key, strip_tags
from .transliteration import generate_slug, transliterate
