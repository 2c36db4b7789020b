from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CompilerError(RuntimeError):
    def __init__(self, code: str, message: str, hint: str = ""):
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint


class StdinTooLarge(CompilerError):
    def __init__(self, limit: int):
        super().__init__(
            "ERR_STDIN_LIMIT",
            f"stdin exceeds {limit} bytes",
            hint="raise PYBYTE_STDIN_MAX_BYTES or set it to 0 to disable the cap",
        )
        self.limit = limit


class CompileOptions(BaseModel):
    model_config = ConfigDict(frozen=True)
    filename: Optional[str] = None
    files: List[str] = Field(default_factory=list)
    compile_as_module: bool = True
    create_loader: bool = False
    # None means the configured default pattern.
    loader_pattern: Optional[str] = None
    output: Optional[str] = None


class CompileSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)
    status: Literal["ok"] = "ok"
    path: str
    output: str
    loader: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True


class CompileFailure(BaseModel):
    model_config = ConfigDict(frozen=True)
    status: Literal["error"] = "error"
    path: str
    error: str
    code: str = ""

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"Error: {self.path}: {self.error}"


CompileOutcome = Annotated[Union[CompileSuccess, CompileFailure], Field(discriminator="status")]
