# action.py

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

"""Single-use deferred actions and the helpers creating them.

  An action wraps a function that takes no arguments. It can be invoked
  exactly once. Deferring a call with arguments can happen in two ways,
  which differ in when the argument expressions get evaluated:

  eager(print, counter.count())
    The arguments are evaluated right away, at registration time, and
    the resulting values are frozen into the action.

  lazy(lambda: print(counter.count()))
    The entire call, including its arguments, is evaluated only once
    the action runs and observes the state at that point.
"""

from deso.defer.error import (
  InvalidStateError,
)
from functools import (
  partial,
)


class Action:
  """A function wrapper guarding against multiple executions."""
  def __init__(self, function):
    """Initialize an action wrapping the given nullary function."""
    if not callable(function):
      raise TypeError("Deferred action must be callable, got %r" % (function,))

    self._function = function


  def __call__(self):
    """On a call of the object invoke the underlying function."""
    if self._function is None:
      raise InvalidStateError("Deferred action %r was already executed" % self)

    # Mark function as executed before running it. A function that
    # raises counts as executed just as well. Dropping the reference
    # also releases everything the function captured.
    function, self._function = self._function, None
    function()


  def __repr__(self):
    """Retrieve a textual representation of the action."""
    if self._function is None:
      return "Action(<executed>)"

    return "Action(%r)" % (self._function,)


  @property
  def executed(self):
    """Check whether the action has been consumed already."""
    return self._function is None


def eager(function, /, *args, **kwargs):
  """Create an action calling a function with arguments evaluated now."""
  # The caller evaluated all argument expressions before we got invoked,
  # so binding the values is all that is left to do.
  return Action(partial(function, *args, **kwargs))


def lazy(body):
  """Create an action running a nullary body only on execution."""
  return Action(body)


def toAction(value):
  """Convert a value into an Action, if it is not one already."""
  if isinstance(value, Action):
    return value

  return lazy(value)
