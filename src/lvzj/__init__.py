"""lvzj: parser and renderer for the LvZJ (Lidi v Zemi Jazyk) markup."""

__version__ = "0.1.0"

from lvzj.config import LvzjConfig, ParserOptions, RenderOptions, load_config  # noqa: E402
from lvzj.converter import Converter  # noqa: E402
from lvzj.errors import InputTooComplex, InputTooLarge, LvzjError  # noqa: E402
from lvzj.nodes import LvzjNode, NodeType  # noqa: E402
from lvzj.parser import LvzjParser, parse  # noqa: E402

__all__ = [
    "Converter",
    "InputTooComplex",
    "InputTooLarge",
    "LvzjConfig",
    "LvzjError",
    "LvzjNode",
    "LvzjParser",
    "NodeType",
    "ParserOptions",
    "RenderOptions",
    "__version__",
    "load_config",
    "parse",
]
