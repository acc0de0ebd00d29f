"""Shared functionality for election file I/O. Internal."""

from __future__ import annotations

import typing
from typing import Any, Callable, Iterable, TextIO, Tuple

from clearballot.errors import FileOpenFailed


ENCODING: str = 'utf8'


def loaders(line_loader: Callable[..., Any]
            ) -> Tuple[Callable[..., Any], Callable[..., Any]]:
    """Create load() and loads() functions from an iterating function."""
    return_annot = typing.get_type_hints(line_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return line_loader(file, **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return line_loader(iter(text.split('\n')), **kwargs)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            if not line.endswith('\n'):
                line += '\n'
            file.write(line)

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + ('' if line.endswith('\n') else '\n')
            for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps


def open_file(path: str, mode: str = 'r', **kwargs) -> TextIO:
    """Open a text file, converting failures to :class:`FileOpenFailed`."""
    try:
        return open(path, mode, encoding=ENCODING, **kwargs)
    except OSError as err:
        raise FileOpenFailed(path, mode) from err
