"""Data transform pipeline applied around physical reads and writes"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Any, Optional, TYPE_CHECKING

from ..api.exceptions import TransformError
from ..models.target import Target
from ..utils.async_utils import maybe_await

if TYPE_CHECKING:
    from .context import DeployContext


class DataTransformerMode(Enum):
    """Direction of a transformation"""
    RESTORE = "restore"
    TRANSFORM = "transform"


@dataclass
class DataTransformerContext:
    """Argument passed to a transform module's functions"""
    data: bytes
    mode: DataTransformerMode
    options: Any = None


# Function a transform module must expose for each mode
TRANSFORMER_FUNCTIONS = {
    DataTransformerMode.TRANSFORM: "transform_data",
    DataTransformerMode.RESTORE: "restore_data",
}


class TransformPipeline:
    """Runs byte buffers through an optional transform module"""

    def __init__(self, module: Optional[ModuleType] = None, options: Any = None):
        """
        Args:
            module: Transform module, None for the identity pipeline
            options: Free-form options handed to the module
        """
        self.module = module
        self.options = options
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    def load(cls, context: 'DeployContext', target: Target) -> 'TransformPipeline':
        """Build the pipeline configured for a target

        Raises:
            TransformError: If the transformer module cannot be loaded
        """
        if not target.has_transformer:
            return cls()

        try:
            module = context.require(str(target.transformer).strip())
        except Exception as e:
            raise TransformError(
                f"Could not load transformer '{target.transformer}': {e}"
            ) from e

        return cls(module, target.transformer_options)

    @property
    def is_identity(self) -> bool:
        return self.module is None

    async def transform(self, data: bytes) -> bytes:
        return await self.apply(data, DataTransformerMode.TRANSFORM)

    async def restore(self, data: bytes) -> bytes:
        return await self.apply(data, DataTransformerMode.RESTORE)

    async def apply(self, data: bytes, mode: DataTransformerMode) -> bytes:
        return await apply_transform(data, mode, self.module, self.options)


async def apply_transform(data: bytes,
                          mode: DataTransformerMode,
                          module: Optional[Any] = None,
                          options: Any = None) -> bytes:
    """Apply one direction of a transform module to a buffer

    Args:
        data: Input bytes
        mode: TRANSFORM before a write, RESTORE after a read
        module: Object exposing transform_data / restore_data
        options: Options handed to the function

    Returns:
        Output bytes (the input itself when no module is configured)

    Raises:
        TransformError: If the module lacks the function for ``mode``, the
            function raises or it returns something other than bytes
    """
    if module is None:
        return data

    function_name = TRANSFORMER_FUNCTIONS[mode]
    function = getattr(module, function_name, None)
    if not callable(function):
        name = getattr(module, "__name__", repr(module))
        raise TransformError(f"Transformer '{name}' does not provide '{function_name}'")

    ctx = DataTransformerContext(data=bytes(data), mode=mode, options=options)

    try:
        result = await maybe_await(function(ctx))
    except Exception as e:
        raise TransformError(f"{function_name} failed: {e}") from e

    if not isinstance(result, (bytes, bytearray, memoryview)):
        raise TransformError(
            f"{function_name} returned {type(result).__name__}, expected bytes"
        )

    return bytes(result)
