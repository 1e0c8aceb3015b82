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
"""Module defining argument parsing utilities."""

import argparse
from typing import Any, Sequence

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "bool_options",
    "optional_int",
    "optional_bool",
    "key_value_pair",
    "StoreKeyValuePairs"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


def bool_options(
    default: bool | None = None,
    const: bool | None = True
) -> dict[str, Any]:
    """
    Create a Boolean argument.

    Parameters
    ----------
    `default: bool | None = None` - The default argument value used when the
    argument is not given.

    `const: bool | None = True` - The standard argument value used when the
    argument is given without a value.

    Returns
    -------
    `dict[str, Any]` - A dictionary of options for creating a Boolean argument.
    """
    return {
        "nargs": "?",
        "choices": [True, False],
        "default": default,
        "const": const,
        "type": optional_bool
    }


def optional_int(value: str) -> int | None:
    """
    Optional integer argument type.

    Return None if the value is an empty string or the string "None", otherwise
    return the input string parsed as an integer.
    """
    if not value or value == "None":
        return None
    try:
        return int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"Cannot parse {value} as int: {error}"
        ) from error


def optional_bool(value: str) -> bool | None:
    """
    Optional boolean argument type.

    Return None if the value is an empty string or the string "None",
    otherwise return the input string parsed as a boolean.
    """
    if not value or value == "None":
        return None
    if value.lower() in ["true", "yes", "on"]:
        return True
    if value.lower() in ["false", "no", "off"]:
        return False
    raise argparse.ArgumentTypeError(f"Cannot parse {value} as a boolean.")


def key_value_pair(value: str) -> tuple[int, str]:
    """
    Integer key and string value argument type.

    Parse a string of the form "KEY=VALUE", where the key is an integer and
    the value is any string (possibly empty). A string without an equals
    sign is taken as a key whose value is the key's own string form.
    """
    key, sep, item = value.partition("=")
    parsed_key = optional_int(key.strip())
    if parsed_key is None:
        raise argparse.ArgumentTypeError(
            f"Missing key in key-value pair '{value}'."
        )
    return parsed_key, (item if sep else str(parsed_key))


class StoreKeyValuePairs(argparse.Action):
    """
    Action for storing a series of "KEY=VALUE" arguments as a list of
    key-value tuple pairs in the namespace.

    Pairs given over repeated uses of the option are accumulated in order.
    """

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None
    ) -> None:
        """
        Store the given values as key-value pairs in the namespace.

        Parameters
        ----------
        `parser: argparse.ArgumentParser` - The argument parser.

        `namespace: argparse.Namespace` - The namespace to store the values in.

        `values: str | Sequence[Any] | None` - The values to parse.

        `option_string: str | None` - The option string that was used to
        invoke the action.
        """
        if values is None:
            values = []
        elif isinstance(values, str):
            values = [values]
        pairs: list[tuple[int, str]] = list(
            getattr(namespace, self.dest) or []
        )
        for pair in values:
            if not isinstance(pair, tuple):
                try:
                    pair = key_value_pair(pair)
                except argparse.ArgumentTypeError as error:
                    parser.error(
                        f"argument {option_string}: {error}"
                    )
            pairs.append(pair)
        setattr(namespace, self.dest, pairs)
