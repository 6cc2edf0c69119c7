from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from yolk.util import load_json


class CompilerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    line_limit: int = Field(70, gt=0, description="Maximum characters per output line.")
    optimize: bool = Field(True, description="Fold constants and drop unexported statements.")
    verbose: bool = Field(False, description="Print progress lines while compiling.")
    max_fold_iterations: Optional[int] = Field(
        None, gt=0, description="Cap on constant folding passes; unbounded when omitted.")

    @classmethod
    def load(cls, path: str) -> "CompilerConfig":
        """Reads the "compiler" section of a JSON config file."""
        return cls.model_validate(load_json(path).get("compiler", {}))


class DirectoriesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    input: str = Field("./inputs", description="Directory holding .yolk sources.")
    output: str = Field("./outputs", description="Directory receiving .yolol and .json artifacts.")

    @classmethod
    def load(cls, path: str) -> "DirectoriesConfig":
        return cls.model_validate(load_json(path).get("directories", {}))
