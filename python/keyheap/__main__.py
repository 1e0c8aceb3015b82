###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.
"""Demonstrate a min-priority queue on the command line."""

import argparse
import logging
import os
import sys
import tomllib
from typing import Any, Final, Sequence

import numpy as np

from keyheap.auxiliary.argparseutils import (StoreKeyValuePairs,
                                             bool_options, optional_int)
from keyheap.datastructures.queues import (MinPriorityQueue, natural_order,
                                           reverse_order)
from keyheap.errors import InvalidKeyError

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = ()


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


_DEFAULT_KEYS: Final[list[int]] = [4, 893, 100, 57, 12, 6]
_DEFAULT_VALUES: Final[list[str]] = ["10", "6", "88", "45", "23", "3"]

_CONFIG_TYPES: Final[dict[str, type]] = {
    "keys": list,
    "values": list,
    "reverse": bool,
    "random": int,
    "seed": int,
    "remove": int,
    "debug": bool
}
_CONFIG_OPTIONS: Final[frozenset[str]] = frozenset(_CONFIG_TYPES)


def _build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the demonstration."""
    parser = argparse.ArgumentParser(
        prog="keyheap",
        description="Build a min-priority queue, print it as a tree, "
                    "and remove its minimal entries in order."
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to a TOML file with a [queue] table of options."
    )
    parser.add_argument(
        "-k", "--keys",
        type=int,
        nargs="*",
        default=None,
        help="The integer keys of the queue."
    )
    parser.add_argument(
        "-v", "--values",
        type=str,
        nargs="*",
        default=None,
        help="The values of the queue, paired with the keys by position. "
             "Defaults to the string form of each key."
    )
    parser.add_argument(
        "-r", "--random",
        type=optional_int,
        default=None,
        help="Generate this many random integer keys instead of using "
             "the given keys."
    )
    parser.add_argument(
        "-s", "--seed",
        type=optional_int,
        default=None,
        help="The seed for generating random keys."
    )
    parser.add_argument(
        "--reverse",
        help="Pop the largest key first.",
        **bool_options()
    )
    parser.add_argument(
        "-i", "--insert",
        nargs="*",
        action=StoreKeyValuePairs,
        default=None,
        metavar="KEY=VALUE",
        help="Entries to insert after building the queue."
    )
    parser.add_argument(
        "-n", "--remove",
        type=optional_int,
        default=None,
        help="The number of minimal entries to remove, defaults to all."
    )
    parser.add_argument(
        "--debug",
        help="Log debug messages.",
        **bool_options()
    )
    return parser


def _load_config(path: str) -> dict[str, Any]:
    """
    Load the [queue] table of a TOML configuration file.

    Raises
    ------
    `ValueError` - If the file does not exist, is not valid TOML, or the
    table contains unknown options or options of the wrong type.
    """
    if not os.path.isfile(path):
        raise ValueError(f"Configuration file '{path}' does not exist.")
    try:
        with open(path, "rb") as file:
            config = tomllib.load(file)
    except tomllib.TOMLDecodeError as error:
        raise ValueError(
            f"Cannot parse configuration file '{path}': {error}"
        ) from error
    table = config.get("queue", {})
    if not isinstance(table, dict):
        raise ValueError("The 'queue' entry must be a table.")
    if unknown := set(table) - _CONFIG_OPTIONS:
        raise ValueError(
            f"Unknown options in configuration file: {sorted(unknown)}. "
            f"Allowed options are: {sorted(_CONFIG_OPTIONS)}."
        )
    for name, value in table.items():
        type_ = _CONFIG_TYPES[name]
        # Booleans are integers in Python, but not valid integer options.
        if (not isinstance(value, type_)
                or (type_ is int and isinstance(value, bool))):
            raise ValueError(
                f"Option '{name}' in configuration file must be of type "
                f"{type_.__name__}, got {type(value).__name__} {value!r}."
            )
    return table


def _resolve_options(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the configuration file with the arguments given explicitly."""
    options: dict[str, Any] = {}
    if args.config is not None:
        options.update(_load_config(args.config))
    for name in _CONFIG_OPTIONS:
        if (value := getattr(args, name)) is not None:
            options[name] = value
    options["insert"] = args.insert or []
    return options


def _make_entries(options: dict[str, Any]) -> tuple[list[Any], list[Any]]:
    """Get the keys and values to build the queue from."""
    if (count := options.get("random")) is not None:
        if count < 0:
            raise ValueError("The number of random keys must be non-negative.")
        rng = np.random.default_rng(options.get("seed"))
        keys = rng.integers(0, 1000, size=count).tolist()
        return keys, [str(key) for key in keys]
    keys = options.get("keys")
    if keys is None:
        return list(_DEFAULT_KEYS), list(_DEFAULT_VALUES)
    values = options.get("values")
    if values is None:
        values = [str(key) for key in keys]
    return list(keys), list(values)


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the demonstration with the given command line arguments.

    Returns
    -------
    `int` - The exit status, 0 on success and 1 if a key is invalid.
    """
    parser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    try:
        options = _resolve_options(args)
        keys, values = _make_entries(options)
    except ValueError as error:
        parser.error(str(error))

    debug: bool = bool(options.get("debug", False))
    logging.basicConfig(
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.WARNING)

    comparator = reverse_order if options.get("reverse") else natural_order
    try:
        queue: MinPriorityQueue[Any, Any] = MinPriorityQueue.from_keys_values(
            keys, values, comparator, debug=debug
        )
        for key, value in options.get("insert", []):
            queue.insert(key, value)
    except InvalidKeyError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(f"{queue}:")
    print(queue.format_preorder())

    remove = options.get("remove")
    if remove is None:
        remove = len(queue)
    for _ in range(max(remove, 0)):
        if (entry := queue.remove_min()) is None:
            break
        print(f"Removed {entry.key}: {entry.value}")

    if queue:
        print(f"Remaining {queue}:")
        print(queue.format_preorder())
    return 0


def _main() -> int:
    return run()


if __name__ == "__main__":
    sys.exit(_main())
