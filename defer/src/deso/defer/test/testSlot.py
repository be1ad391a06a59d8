# testSlot.py

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

"""Tests for the single action defer slot."""

from deso.defer import (
  Defer,
  eager,
  InvalidStateError,
  lazy,
)
from unittest import (
  TestCase,
  main,
)


class TestSlot(TestCase):
  """A test case for the Defer slot."""
  def testSlotRunsOnBlockExit(self):
    """Verify that the action runs on block exit but not beforehand."""
    calls = []

    with Defer(lambda: calls.append("run")) as slot:
      self.assertEqual(calls, [])
      self.assertFalse(slot.destroyed)

    self.assertEqual(calls, ["run"])
    self.assertTrue(slot.destroyed)


  def testSlotRunsOnException(self):
    """Verify that the action runs if the block is left with an exception."""
    calls = []

    with self.assertRaises(KeyError):
      with Defer(lambda: calls.append("run")):
        raise KeyError("failure")

    self.assertEqual(calls, ["run"])


  def testSlotRunsOnEarlyReturn(self):
    """Verify that the action runs if the block is left by returning."""
    calls = []

    def work():
      with Defer(lambda: calls.append("deferred")):
        calls.append("body")
        return "result"

    self.assertEqual(work(), "result")
    self.assertEqual(calls, ["body", "deferred"])


  def testSlotsNestInReverseOrder(self):
    """Verify that nested slots run innermost first."""
    calls = []

    with Defer(eager(calls.append, 1)):
      with Defer(eager(calls.append, 2)):
        with Defer(eager(calls.append, 3)):
          pass

    self.assertEqual(calls, [3, 2, 1])


  def testSlotPropagatesActionFailure(self):
    """Verify that a failing action is not suppressed."""
    def fail():
      raise ValueError("cleanup failed")

    with self.assertRaises(ValueError):
      with Defer(fail):
        pass


  def testSlotChainsFailures(self):
    """Verify that a failing action chains the exception leaving the block."""
    def fail():
      raise ValueError("cleanup failed")

    with self.assertRaises(ValueError) as cm:
      with Defer(fail):
        raise KeyError("body failed")

    self.assertIsInstance(cm.exception.__context__, KeyError)


  def testSlotDestroyTwice(self):
    """Verify that a slot cannot be destroyed twice."""
    calls = []
    slot = Defer(lambda: calls.append("run"))

    slot.destroy()
    with self.assertRaises(InvalidStateError):
      slot.destroy()

    self.assertEqual(calls, ["run"])


  def testSlotRejectsNonCallable(self):
    """Verify that a slot needs a callable action."""
    with self.assertRaises(TypeError):
      Defer(None)


  def testSlotCaptureTiming(self):
    """Verify eager and lazy capture with a single slot each."""
    counter = [0]
    result = []

    with Defer(lazy(lambda: result.append(("lazy", counter[0])))):
      with Defer(eager(result.append, ("eager", counter[0]))):
        counter[0] = 3

    self.assertEqual(result, [("eager", 0), ("lazy", 3)])


  def testSlotWarnsIfNeverDestroyed(self):
    """Verify that a slot collected with its action pending emits a warning."""
    calls = []

    with self.assertWarns(ResourceWarning):
      slot = Defer(lambda: calls.append("run"))
      del slot

    # The action must not have been run by the finalizer.
    self.assertEqual(calls, [])


  def testSlotLogsExecution(self):
    """Verify that registration and execution of the action are logged."""
    with self.assertLogs("deso.defer.slot", level="DEBUG") as cm:
      with Defer(lambda: None):
        pass

    self.assertEqual(len(cm.output), 2)
    self.assertIn("deferred", cm.output[0])
    self.assertIn("running", cm.output[1])


if __name__ == "__main__":
  main()
