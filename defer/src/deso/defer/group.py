# group.py

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

"""An ordered group of deferred actions drained on block exit.

  A group keeps its actions in a single sequence. Actions can be put at
  the front (prepend) or at the back (append) of it. On destruction the
  sequence is traversed from front to back and every action is run
  exactly once. As a result, prepended actions run in reverse order of
  registration, appended ones in order of registration, and all
  prepended ones before all appended ones.
  For example, append(a), prepend(b), append(c), prepend(d) runs d, b,
  a, c.

  Code in a nested scope may hold a reference to the group of an
  enclosing scope and register actions with it. These actions run when
  the enclosing scope ends, not the nested one. Registering with a group
  that is draining or already drained is an error.

  Groups perform no locking. Using the same group from multiple threads
  concurrently is not supported.
"""

from collections import (
  deque,
)
from deso.defer.action import (
  eager,
  toAction,
)
from deso.defer.error import (
  DrainError,
  InvalidStateError,
)
from logging import (
  getLogger,
)
from warnings import (
  warn,
)


_LOG = getLogger(__name__)

PENDING = "pending"
DRAINING = "draining"
DRAINED = "drained"


def _combine(errors):
  """Combine the failures of a drain pass into a single exception."""
  if len(errors) == 1:
    return errors[0]

  error = DrainError(errors)
  error.__cause__ = errors[0]
  return error


class DeferGroup:
  """Objects of this class act as a context with which to register deferred actions."""
  def __init__(self):
    """Initialize a group object to make it ready for use."""
    self._actions = deque()
    self._state = PENDING


  def __enter__(self):
    """The block enter handler just returns a reference to this object."""
    return self


  def __exit__(self, type_, value, traceback):
    """The block exit handler destroys the object."""
    self.destroy()


  def __del__(self):
    """Warn about a group that got collected with actions still queued."""
    if getattr(self, "_state", None) == PENDING and self._actions:
      warn("DeferGroup with %d pending actions was never destroyed" % len(self._actions),
           ResourceWarning, source=self)


  def __len__(self):
    """Retrieve the number of actions not yet run."""
    return len(self._actions)


  def __bool__(self):
    """A group is always truthy, even if it has no actions queued."""
    return True


  def _checkPending(self):
    """Make sure the group still accepts registrations."""
    if self._state != PENDING:
      raise InvalidStateError("Cannot register with a %s DeferGroup" % self._state)


  def prepend(self, action):
    """Register an action to run before all currently registered ones."""
    self._checkPending()

    action = toAction(action)
    self._actions.appendleft(action)
    _LOG.debug("prepended %r", action)
    return action


  def append(self, action):
    """Register an action to run after all currently registered ones."""
    self._checkPending()

    action = toAction(action)
    self._actions.append(action)
    _LOG.debug("appended %r", action)
    return action


  def defer(self, function, /, *args, **kwargs):
    """Register a deferred function invocation with arguments evaluated now."""
    # Scope level registrations always go to the front, so that clean up
    # happens in reverse order of setup.
    return self.prepend(eager(function, *args, **kwargs))


  def destroy(self):
    """Destroy the object, invoke all deferred actions."""
    if self._state != PENDING:
      raise InvalidStateError("DeferGroup was already destroyed")

    self._state = DRAINING
    _LOG.debug("draining %d deferred actions", len(self._actions))

    errors = []
    try:
      while self._actions:
        action = self._actions.popleft()
        try:
          action()
        except Exception as e:
          # Keep going. Every remaining action still has to run.
          _LOG.debug("deferred %r failed", action, exc_info=True)
          errors += [e]
    except BaseException as e:
      # An exception not derived from Exception ends the drain early.
      # Failures seen up to this point get chained to it.
      if errors:
        e.__context__ = _combine(errors)
      raise
    finally:
      # Whatever is left over gets discarded.
      self._actions.clear()
      self._state = DRAINED

    if errors:
      raise _combine(errors)


  @property
  def state(self):
    """Retrieve the lifecycle state of the group."""
    return self._state
