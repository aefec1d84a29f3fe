"""Template rendering engine."""

from __future__ import annotations

import logging
import os
from typing import IO, Any, Callable, Iterable, Mapping

from jinja2 import (
    BaseLoader,
    ChainableUndefined,
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    nodes,
)

from ..core.errors import (
    ConfigurationError,
    InputError,
    TemplateExecutionError,
    TemplateParseError,
)
from ..core.models import InputOrder, MissingKeyPolicy, RendererConfig, RenderUnit
from .helpers import default_helpers
from .io import STDOUT, FileSystem, LocalFileSystem, open_output
from .paths import base_name, child_output_target, get_output_path

logger = logging.getLogger(__name__)


class RenderUnitLoader(BaseLoader):
    """Serve the sources of one render unit by their base names.

    When two sources share a base name the later one wins, so a target can
    replace a preload of the same name.
    """

    def __init__(self, sources: Iterable[str]) -> None:
        self._paths = {base_name(source): source for source in sources}

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str, Callable[[], bool]]:
        path = self._paths.get(template)
        if path is None:
            raise TemplateNotFound(template)
        try:
            with open(path, encoding="utf-8") as handle:
                source = handle.read()
        except OSError as exc:
            raise TemplateNotFound(template, f"{path}: {exc.strerror}") from exc
        return source, path, lambda: True

    def list_templates(self) -> list[str]:
        return sorted(self._paths)


def _exported_names(module: Any) -> dict[str, Any]:
    return {
        name: value
        for name, value in vars(module).items()
        if not name.startswith("_")
    }


def _definition_templates(env: Environment, name: str) -> list[Template]:
    """Compile each top-level macro of a source into its own template.

    Only macro definitions (and the imports they may use) are kept, so the
    top-level text of a source is never executed. A macro compiled alone
    looks up every other name in the render context when it is called.
    """
    source, filename, _ = env.loader.get_source(env, name)
    tree = env.parse(source, name, filename)
    imports = [
        node for node in tree.body if isinstance(node, (nodes.Import, nodes.FromImport))
    ]

    templates = []
    for node in tree.body:
        if not isinstance(node, nodes.Macro):
            continue
        body = nodes.Template([*imports, node], lineno=node.lineno)
        body.set_environment(env)
        code = env.compile(body, name, filename)
        templates.append(
            env.template_class.from_code(env, code, env.make_globals(None))
        )
    return templates


class Renderer:
    """Render a set of inputs against a value map.

    Inputs are walked depth first in the order they were given; the children
    of a directory are visited in sorted order. Every file found is rendered
    together with the preload files, which are parsed first so the file's
    own definitions win over theirs.

    When the output target names a single file, every render is appended to
    it: rendering several inputs into one file concatenates them, and running
    twice duplicates the content. Nothing is truncated.

    Usage:
        renderer = Renderer(RendererConfig(inputs=("templates/",)))
        renderer.execute("out/", {"name": "World"})
    """

    def __init__(
        self, config: RendererConfig, fs: FileSystem | None = None
    ) -> None:
        self.config = config
        self.fs = fs or LocalFileSystem()
        self._helpers = {**default_helpers(), **config.helpers}

    def execute(self, out: str, values: Mapping[str, Any]) -> list[str]:
        """Render every configured input.

        Args:
            out: ``-`` for standard output, a path ending in a separator to
                mirror inputs below it, or a single output file
            values: Value map shared read-only by every render

        Returns:
            Output destinations in the order they were rendered

        Raises:
            RenderError: On the first failure; remaining inputs are skipped
        """
        outputs: list[str] = []
        self._walk(self.config.inputs, out, values, InputOrder.PRESERVE, outputs)
        logger.debug(f"Rendered {len(outputs)} unit(s)")
        return outputs

    def _walk(
        self,
        inputs: Iterable[str],
        out: str,
        values: Mapping[str, Any],
        order: InputOrder,
        outputs: list[str],
    ) -> None:
        paths = sorted(inputs) if order is InputOrder.SORTED else list(inputs)

        for path in paths:
            try:
                is_dir = self.fs.stat_is_dir(path)
            except OSError as exc:
                raise InputError(
                    f"Cannot open input {path!r}: {exc}", sources=(path,)
                ) from exc

            if not is_dir:
                unit = self.unit_for(path, out, values)
                self.render(unit)
                outputs.append(unit.output_path)
                continue

            try:
                names = self.fs.list_dir(path)
            except OSError as exc:
                raise InputError(
                    f"Cannot list directory {path!r}: {exc}", sources=(path,)
                ) from exc

            logger.debug(f"Descending into {path} ({len(names)} entries)")
            children = [os.path.join(path, name) for name in names]
            self._walk(
                children,
                child_output_target(out, path),
                values,
                InputOrder.SORTED,
                outputs,
            )

    def unit_for(self, path: str, out: str, values: Mapping[str, Any]) -> RenderUnit:
        """Build the render unit for a single template file."""
        return RenderUnit(
            sources=(*self.config.preload_files, path),
            output_path=get_output_path(out, base_name(path), self.fs),
            values=values,
        )

    def render(self, unit: RenderUnit) -> None:
        """Parse and execute one render unit into its destination.

        Raises:
            ConfigurationError: If the output name is blank
            OutputError: If the destination cannot be opened
            TemplateParseError: If any source fails to load or parse
            TemplateExecutionError: If executing the target fails
        """
        if not unit.output_path.strip():
            raise ConfigurationError(
                "Output name cannot be blank", sources=unit.sources
            )

        joined = ", ".join(unit.sources)
        with open_output(unit.output_path) as stream:
            if unit.output_path == STDOUT:
                logger.info(f"Rendering [{joined}] to STDOUT")
            else:
                logger.info(f"Rendering [{joined}] into {unit.output_path}")

            env = self._environment(unit)
            definitions, target = self._parse(env, unit)
            self._run(definitions, target, unit, stream)

    def _environment(self, unit: RenderUnit) -> Environment:
        if self.config.missing_key is MissingKeyPolicy.ERROR:
            undefined = StrictUndefined
        else:
            undefined = ChainableUndefined

        env = Environment(
            loader=RenderUnitLoader(unit.sources),
            undefined=undefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.globals.update(self._helpers)
        for name, helper in self._helpers.items():
            # Built-in filters keep their Jinja2 behaviour.
            env.filters.setdefault(name, helper)
        return env

    def _parse(
        self, env: Environment, unit: RenderUnit
    ) -> tuple[list[Template], Template]:
        """Parse every distinct source.

        Returns:
            The definition templates of all sources in parse order, and the
            target template
        """
        names: list[str] = []
        for source in unit.sources:
            name = base_name(source)
            if name in names:
                names.remove(name)
            names.append(name)

        try:
            definitions = [
                definition
                for name in names
                for definition in _definition_templates(env, name)
            ]
            return definitions, env.get_template(names[-1])
        except TemplateError as exc:
            raise TemplateParseError(
                f"Cannot parse templates [{', '.join(unit.sources)}]: {exc}",
                sources=unit.sources,
                destination=unit.output_path,
            ) from exc

    def _run(
        self,
        definitions: list[Template],
        target: Template,
        unit: RenderUnit,
        stream: IO[str],
    ) -> None:
        # One namespace for the whole unit: helpers, then values, then macros
        # in parse order. Macros look names up in it when called, so the last
        # definition of a name wins everywhere.
        namespace: dict[Any, Any] = {**target.globals, **unit.values}
        try:
            for definition in definitions:
                module = definition.make_module(vars=namespace, shared=True)
                namespace.update(_exported_names(module))
            context = target.new_context(namespace, shared=True)
            stream.writelines(target.root_render_func(context))
        except Exception as exc:
            raise TemplateExecutionError(
                f"Cannot execute templates [{', '.join(unit.sources)}] "
                f"into {unit.output_path}: {exc}",
                sources=unit.sources,
                destination=unit.output_path,
            ) from exc
