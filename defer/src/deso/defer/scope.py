# scope.py

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

"""A module for deferred function invocation functionality."""

from deso.defer.group import (
  DeferGroup,
)
from functools import (
  wraps,
)


def defer():
  """Request a new defer context.

    The defer functionality is meant to be used in conjunction with
    'with' blocks, like so:
    with defer() as d:
      d.defer(doSth)
      d.defer(print, "Executed")
      raise Exception()

    The result is that even in the face of exceptions the doSth()
    function call and the print with the given arguments are executed on
    block exit (but not beforehand), in reverse order of registration.
    This functionality allows for performing clean up in an
    exception-safe manner.
  """
  return DeferGroup()


def deferScope(function):
  """Decorator providing a defer context spanning the entire function call.

    The decorated function receives a fresh DeferGroup as the 'defer'
    keyword argument on every invocation. Deferred actions registered
    with it, also from nested blocks or from helper functions the group
    is handed to, run once the function returns or raises:

    @deferScope
    def work(path, defer):
      f = open(path)
      defer.defer(f.close)
  """
  @wraps(function)
  def withGroup(*args, **kwargs):
    """Invoke the decorated function inside of a defer context."""
    with DeferGroup() as group:
      return function(*args, defer=group, **kwargs)

  return withGroup
