import contextlib
import json
import pathlib
import sys
from typing import IO, Any, Generator, Union


@contextlib.contextmanager
def smart_open(
    filename: Union[str, pathlib.Path],
    mode: str = "w",
    create_parent_dirs: bool = True,
) -> Generator[IO[Any], None, None]:
    """
    Opens a file, or yields stdout/stdin when the filename is "-".
    The standard streams are never closed.
    """
    if str(filename) == "-":
        yield sys.stdout if "w" in mode else sys.stdin
        return

    path = pathlib.Path(filename)
    if create_parent_dirs and "w" in mode:
        path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, mode, encoding="utf-8") as fh:
        yield fh


def load_json(filename: Union[str, pathlib.Path]) -> Any:
    with smart_open(filename, "r") as fh:
        return json.load(fh)


def write_text(filename: Union[str, pathlib.Path], content: str) -> None:
    with smart_open(filename, "w") as fh:
        fh.write(content)
        if not content.endswith("\n"):
            fh.write("\n")
