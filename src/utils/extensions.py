import importlib
import inspect
import pkgutil
from typing import Iterator, NoReturn

from src import cmds


def unqualify(name: str) -> str:
    """Return an unqualified name given a qualified module/package `name`."""
    return name.rsplit(".", maxsplit=1)[-1]


def walk_extensions() -> Iterator[str]:
    """Yield the name of every module under `src.cmds` that defines a `setup` function."""

    def on_error(name: str) -> NoReturn:
        raise ImportError(name=name)

    for module in pkgutil.walk_packages(cmds.__path__, f"{cmds.__name__}.", onerror=on_error):
        if module.ispkg or unqualify(module.name).startswith("_"):
            continue

        imported = importlib.import_module(module.name)
        if inspect.isfunction(getattr(imported, "setup", None)):
            yield module.name
