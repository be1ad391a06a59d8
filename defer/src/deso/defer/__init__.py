# __init__.py

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

"""Initialization file for the deso.defer module."""

from deso.defer.action import (
  Action,
  eager,
  lazy,
  toAction,
)
from deso.defer.error import (
  DeferError,
  DrainError,
  InvalidStateError,
)
from deso.defer.group import (
  DeferGroup,
)
from deso.defer.scope import (
  defer,
  deferScope,
)
from deso.defer.slot import (
  Defer,
)
