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

"""Module for all errors raised by keyheap data structures."""

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "KeyHeapError",
    "InvalidKeyError"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


class KeyHeapError(Exception):
    """Base class for all errors in keyheap."""
    pass


class InvalidKeyError(KeyHeapError, ValueError):
    """
    Raised when a key is not acceptable under the ordering of a queue.

    The queue the key was given to is always left unchanged.
    """

    def __init__(self, key: object, reason: str) -> None:
        super().__init__(f"Invalid key {key!r}: {reason}")
        self.key = key
        self.reason = reason
