# error.py

#/***************************************************************************
# *   Copyright (C) 2015 Daniel Mueller (deso@posteo.net)                   *
# *                                                                         *
# *   This program is free software: you can redistribute it and/or modify  *
# *   it under the terms of the GNU General Public License as published by  *
# *   the Free Software Foundation, either version 3 of the License, or     *
# *   (at your option) any later version.                                   *
# *                                                                         *
# *   This program is distributed in the hope that it will be useful,       *
# *   but WITHOUT ANY WARRANTY; without even the implied warranty of        *
# *   MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the         *
# *   GNU General Public License for more details.                          *
# *                                                                         *
# *   You should have received a copy of the GNU General Public License     *
# *   along with this program.  If not, see <http://www.gnu.org/licenses/>. *
# ***************************************************************************/

"""Exceptions raised by the deferred execution functionality."""


class DeferError(RuntimeError):
  """The base class for deso.defer exceptions."""
  pass


class InvalidStateError(DeferError):
  """A class used for signaling misuse of an already consumed object.

    Examples are a second destruction of a slot or group, invoking an
    action twice, or registering into a group that is draining or
    already drained.
  """
  pass


class DrainError(DeferError):
  """A class aggregating the failures of multiple actions of one drain pass."""
  def __init__(self, errors):
    super().__init__()

    # An aggregate of a single error makes no sense. That error should
    # have been propagated as is.
    assert len(errors) > 1, errors

    self._errors = tuple(errors)


  def __str__(self):
    """Convert the error into a human readable string."""
    s = "{count:d} deferred actions failed:".format(count=len(self._errors))
    for error in self._errors:
      s += "\n  {name}: {error}".format(name=type(error).__name__, error=error)

    return s


  @property
  def errors(self):
    """Retrieve the exceptions of the failed actions in execution order."""
    return self._errors
