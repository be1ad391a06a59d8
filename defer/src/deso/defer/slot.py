# slot.py

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

"""A deferred execution slot holding exactly one action."""

from deso.defer.action import (
  toAction,
)
from deso.defer.error import (
  InvalidStateError,
)
from logging import (
  getLogger,
)
from warnings import (
  warn,
)


_LOG = getLogger(__name__)


class Defer:
  """Objects of this class run a single deferred action on block exit.

    The slot is meant to be used in conjunction with 'with' blocks:
    with Defer(lambda: print("Executed")):
      doSth()

    The action runs when the block is left, be it normally or due to an
    exception, but not beforehand. A failure of the action itself is
    not suppressed but propagated out of the block.
  """
  def __init__(self, action):
    """Initialize a slot with the action to defer."""
    self._action = toAction(action)
    _LOG.debug("deferred %r", self._action)


  def __enter__(self):
    """The block enter handler just returns a reference to this object."""
    return self


  def __exit__(self, type_, value, traceback):
    """The block exit handler destroys the object."""
    self.destroy()


  def __del__(self):
    """Warn about a slot that got collected without running its action."""
    # The constructor may have raised before the attribute got set.
    action = getattr(self, "_action", None)
    if action is not None:
      warn("Defer slot with pending %r was never destroyed" % action,
           ResourceWarning, source=self)


  def destroy(self):
    """Destroy the object, invoke the deferred action."""
    if self._action is None:
      raise InvalidStateError("Defer slot was already destroyed")

    action, self._action = self._action, None
    _LOG.debug("running %r", action)
    action()


  @property
  def destroyed(self):
    """Check whether the slot has been destroyed already."""
    return self._action is None
