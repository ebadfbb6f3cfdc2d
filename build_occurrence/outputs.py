import os
import sys
from typing import Mapping, NoReturn, Optional

def set_output_variable(name: str, value: str, environ: Optional[Mapping[str, str]] = None) -> None:
    if environ is None:
        environ = os.environ

    output_path = environ.get("GITHUB_OUTPUT")
    if output_path:
        with open(output_path, "a", encoding="utf-8") as fp:
            fp.write(f"{name}={value}\n")
        return

    # runners without GITHUB_OUTPUT only understand the legacy workflow command
    print(f"::set-output name={name}::{value}")

def fatal(message: str) -> NoReturn:
    print(message)
    sys.exit(1)
