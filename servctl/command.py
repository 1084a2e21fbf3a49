# /*
# Copyright 2026 The Servctl Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Command factory: options dataclass + deps factory + handler -> typer command."""

from __future__ import annotations

import inspect
import re
from collections.abc import Callable
from typing import Any, Generic, TypeVar

import typer

from servctl import logger
from servctl.deps import DependencyFactory
from servctl.errors import ValidationError
from servctl.flags import BoundFlag, iter_flags

OptionsT = TypeVar("OptionsT")

Handler = Callable[[OptionsT, DependencyFactory], None]


class Command(Generic[OptionsT]):
    """A subcommand bound to one options object.

    Parsing is split into ``bind`` -> ``validate`` -> ``execute`` so the
    handler only ever sees fully populated, validated options.

    Attributes:
        name: Subcommand name (e.g. ``service-account``).
        options: Options dataclass instance populated by ``bind``.
        handler: Callback invoked with ``(options, deps_factory)``.
        deps_factory: Injected backend provider.
        help: Help text for ``--help``.
    """

    def __init__(
        self,
        name: str,
        options: OptionsT,
        handler: Handler,
        deps_factory: DependencyFactory,
        help: str = "",
    ) -> None:
        self.name = name
        self.options = options
        self.handler = handler
        self.deps_factory = deps_factory
        self.help = help
        self.supplied: set[str] = set()
        self._flags = list(iter_flags(options))
        self._check_unique_names()

    def _check_unique_names(self) -> None:
        """Reject options structures whose flags collide.

        Raises:
            ValueError: If two flags share a long name or a shorthand.
        """
        seen: dict[str, str] = {}
        for bound in self._flags:
            for decl in bound.spec.option_decls():
                if decl in seen:
                    raise ValueError(
                        f"Command '{self.name}': flag {decl} declared by both "
                        f"'{seen[decl]}' and '{bound.spec.name}'"
                    )
                seen[decl] = bound.spec.name

    @property
    def flags(self) -> list[BoundFlag]:
        return list(self._flags)

    # ------------------------------------------------------------------
    # Parse phases
    # ------------------------------------------------------------------

    def bind(self, values: dict[str, Any]) -> None:
        """Store parsed values into the options object.

        Args:
            values: Mapping of parameter name to the value click parsed.
                None (or an empty sequence for repeated flags) means absent.
        """
        self.supplied = set()
        for bound in self._flags:
            value = values.get(bound.spec.param_name)
            if bound.spec.is_switch:
                bound.set(bool(value))
                if value:
                    self.supplied.add(bound.spec.name)
            elif bound.spec.repeated:
                items = list(value or [])
                bound.set(items)
                if items:
                    self.supplied.add(bound.spec.name)
            elif value is not None:
                bound.set(value)
                self.supplied.add(bound.spec.name)

    def validate(self) -> None:
        """Check required flags, value patterns, then cross-flag rules.

        Options objects may define a ``validate()`` method for rules that
        span several flags. It runs only once every flag passes on its own,
        and the ValidationError it raises is reported like any other.

        Raises:
            ValidationError: With every missing and invalid flag at once.
        """
        missing: list[str] = []
        invalid: list[tuple[str, str, str]] = []
        for bound in self._flags:
            spec = bound.spec
            if spec.required and spec.name not in self.supplied:
                missing.append(spec.name)
                continue
            if spec.pattern and spec.name in self.supplied:
                values = bound.get() if spec.repeated else [bound.get()]
                for value in values:
                    if not re.fullmatch(spec.pattern, value):
                        invalid.append((spec.name, value, f"must match {spec.pattern}"))
        if missing or invalid:
            raise ValidationError(missing=missing, invalid=invalid)

        check_options = getattr(self.options, "validate", None)
        if callable(check_options):
            check_options()

    def execute(self) -> None:
        logger.debug("Executing '%s' with %r", self.name, self.options)
        self.handler(self.options, self.deps_factory)

    def invoke(self, values: dict[str, Any]) -> None:
        self.bind(values)
        self.validate()
        self.execute()

    # ------------------------------------------------------------------
    # typer integration
    # ------------------------------------------------------------------

    def callback(self) -> Callable[..., None]:
        """Build a typer callback whose signature declares every flag."""

        def _callback(**values: Any) -> None:
            self.invoke(values)

        _callback.__signature__ = inspect.Signature([
            inspect.Parameter(
                bound.spec.param_name,
                inspect.Parameter.KEYWORD_ONLY,
                default=bound.spec.typer_option(),
                annotation=bound.spec.annotation(),
            )
            for bound in self._flags
        ])
        _callback.__name__ = self.name.replace("-", "_")
        _callback.__doc__ = self.help
        return _callback

    def register(self, app: typer.Typer) -> None:
        """Add this command to a typer app under its name."""
        app.command(self.name, help=self.help)(self.callback())
