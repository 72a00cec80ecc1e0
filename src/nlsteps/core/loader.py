"""Matcher table discovery and loading infrastructure.

This module defines a mixin responsible for registering built-in matcher
tables and for discovering plugins exposed via Python entry points.

Plugins are loaded defensively: individual failures do not interrupt
the loading process unless strict mode is enabled.
"""

from typing import TYPE_CHECKING
from warnings import warn

from pydantic import ValidationError

from nlsteps.errors import MatcherBuildError, PluginError, PluginWarning
from nlsteps.extensions import Plugin

if TYPE_CHECKING:
    from importlib.metadata import EntryPoint

if TYPE_CHECKING:
    from nlsteps.extensions import Table
    from nlsteps.schema import MatcherTable

#: Entry point group of third-party plugins.
PLUGINS_GROUP = 'nlsteps_plugins'


class MatchersLoaderMixin:
    """Mixin defining matcher table loading behavior.

    Attributes:
        strict_mode: If True, any plugin loading issue raises an error.
            If False, issues are emitted as warnings and loading continues.
        tables: Compiled matcher tables by domain.
    """

    strict_mode: bool = False

    tables: dict[str, 'MatcherTable']

    def add_table(self, table: 'Table',
                  entrypoint: 'EntryPoint | None' = None) -> None:
        """Compile and register a matcher table.

        A table of an already registered domain is merged into the
        existing one. Replacing matchers of known action types is
        reported as shadowing.

        Args:
            table: Declarative table definition.
            entrypoint: Entry point from which the table was loaded,
                if applicable. Used for diagnostics and warnings.

        Raises:
            MatcherBuildError: If a built-in table cannot be compiled.
            PluginError: If a plugin table is invalid or shadows
                matchers on strict mode.
        """
        module = f'{entrypoint.value if entrypoint else table.__module__}'

        try:
            compiled = table.build()

        except MatcherBuildError as base:
            if entrypoint is None:
                raise
            if error := self.emit_plugin_issue(
                f'Table {table.domain!r} from {module!r} cannot be compiled',
                entrypoint,
            ):
                raise error from base
            return

        if (existing := self.tables.get(table.domain)) is None:
            self.tables[table.domain] = compiled
            return

        merged, shadowed = existing.merge(compiled)
        if shadowed and (error := self.emit_plugin_issue(
            f'Table {table.domain!r} from {module!r} is shadowing '
            f'existing matchers: {', '.join(shadowed)}',
            entrypoint,
        )):
            raise error

        self.tables[table.domain] = merged

    def emit_plugin_issue(self, message: str,
                          entrypoint: 'EntryPoint | None' = None) -> Exception | None:
        """Emit a plugin warning or return the exception.

        Args:
            message: Warning message to emit.
            entrypoint: Entry point the issue relates to, if applicable.

        Returns:
            PluginError on strict mode, otherwise `None`
                with producing a PluginWarning.
        """
        if self.strict_mode:
            return PluginError(message, entrypoint=entrypoint)

        warn(message, category=PluginWarning, stacklevel=2)

        return None

    def _load_plugin(self, entrypoint: 'EntryPoint') -> None:
        """Load a single plugin from an entry point.

        Any loading problem is reported through `emit_plugin_issue`. It
        does not interrupt plugin loading by default, but raises on
        strict mode.

        Args:
            entrypoint: Entry point describing the plugin to load.

        Raises:
            PluginError: If any loading issues occur on strict mode.
        """
        try:
            plugin = entrypoint.load()

        except ValidationError as base:
            if error := self.emit_plugin_issue(
                f'Failed to validate entrypoint {entrypoint.name!r}',
                entrypoint,
            ):
                raise error from base
            return

        except Exception as base:
            if error := self.emit_plugin_issue(
                f'Failed to load entrypoint {entrypoint.name!r}',
                entrypoint,
            ):
                raise error from base
            return

        if not isinstance(plugin, Plugin):
            if error := self.emit_plugin_issue(
                f'Loaded from entrypoint {entrypoint.name!r} object is not a plugin',
                entrypoint,
            ):
                raise error
            return

        for table in plugin.tables:
            self.add_table(table, entrypoint)

    def clear_tables(self) -> None:
        """Clear all registered matcher tables."""
        self.tables = {}

    def load_plugins(self) -> None:
        """Load plugins via entry points and register their tables.

        Discovers plugins from the `nlsteps_plugins` entry point group.

        Raises:
            PluginError: If any loading issues occur on strict mode.
        """
        from importlib.metadata import entry_points  # noqa: PLC0415

        for entrypoint in entry_points().select(group=PLUGINS_GROUP):
            self._load_plugin(entrypoint)
