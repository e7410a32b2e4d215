"""Core functionality for bucket-cache"""

from .action_io import get_input, get_list_input, set_output
from .compression import CompressionMethod, TarProcessor, select_compression_method

__all__ = [
    "get_input",
    "get_list_input",
    "set_output",
    "CompressionMethod",
    "TarProcessor",
    "select_compression_method",
]
