"""
Pipeline generator.

Orchestrates the generation phases for one discovery document:
1. Parse the document into the Schema Model
2. Resolve type names and schema references
3. Create one declaration per service, resource, method and schema,
   and let the decorator pipeline fill them in
4. Freeze the Code Model and render it into source units

Errors are collected in a GenerationReport instead of aborting the run:
a declaration that fails is rolled back and its siblings still generate.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from .. import __version__
from ..cli_utils import reconstruct_command_line
from ..utils import snake_to_pascal_case
from .analyzer import CSharpTypeMapper, NameResolver, SchemaResolver
from .code_model import ClassDecl, CodeModel
from .config import CodeGeneratorConfig
from .decorators import DecoratorPipeline, GenerationContext
from .discovery import DiscoveryParser, MethodDef, ResourceDef, SchemaDef
from .errors import GenerationReport, GeneratorError, MalformedDocumentError, UnsupportedConstructError
from .renderers import CSharpRenderer, Renderer

logger = logging.getLogger("discovery_to_code")

DEFAULT_USINGS = [
    "System",
    "System.Collections.Generic",
    "Newtonsoft.Json",
    "Google.Apis.Requests",
    "Google.Apis.Services",
    "Google.Apis.Util",
]


@dataclass
class SourceUnit:
    """A rendered source file: suggested file name and its text."""

    file_name: str
    text: str


@dataclass
class GenerationResult:
    """Source units generated for one service and the errors met on the way."""

    units: list[SourceUnit] = field(default_factory=list)
    report: GenerationReport = field(default_factory=GenerationReport)

    @property
    def service_name(self) -> str:
        return self.report.service_name

    @property
    def ok(self) -> bool:
        return self.report.ok


class PipelineGenerator:
    """Generates C# client code for one discovery document."""

    def __init__(
        self,
        document: dict[str, Any],
        config: CodeGeneratorConfig | None = None,
        pipeline: DecoratorPipeline | None = None,
        renderer: Renderer | None = None,
        command_line: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            document: The parsed discovery document
            config: Code generation configuration
            pipeline: Decorators to apply (built from the config if omitted)
            renderer: Target renderer (C# by default)
            command_line: Command line quoted in the generation comment
                (reconstructed from the active click context if omitted)
        """
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.pipeline = pipeline or DecoratorPipeline.from_config(self.config)
        self.renderer = renderer or CSharpRenderer()
        self.command_line = command_line
        self.report = GenerationReport(service_name=self._document_name(document))
        self.context: GenerationContext | None = None

    def generate(self) -> GenerationResult:
        """
        Generate the source units.

        Returns:
            GenerationResult with the rendered units and the error report.
            A document that cannot be parsed at all yields no units.
        """
        try:
            model = self.build_model()
        except MalformedDocumentError as e:
            self.report.add(e)
            return GenerationResult(units=[], report=self.report)

        model.freeze()

        rendered: list[tuple[str, str]] = []
        for index in model.top_level():
            name = model.get(index).name
            try:
                rendered.append((name, self.renderer.render(model, index)))
            except UnsupportedConstructError as e:
                self.report.add(e)

        units = self._assemble_units(rendered)
        logger.debug(f"Generated {len(units)} source unit(s) for {self.report.service_name}")
        return GenerationResult(units=units, report=self.report)

    def build_model(self) -> CodeModel:
        """
        Run the parsing, naming and decoration phases.

        Returns:
            The populated (not yet frozen) code model

        Raises:
            MalformedDocumentError: If the document itself is unusable
        """
        # Phase 1: Parse the discovery document
        service = DiscoveryParser(self.report).parse(self.document)

        # Phase 2: Resolve names and references
        names = NameResolver(self.config.unique_suffix).resolve_names(service)
        resolver = SchemaResolver(service, names.schema_names)
        self.context = GenerationContext(
            service=service,
            config=self.config,
            names=names,
            resolver=resolver,
            types=CSharpTypeMapper(resolver),
        )

        # Phase 3: Build and decorate declarations
        model = CodeModel()

        service_decl = model.add_class(
            ClassDecl(
                name=names.service_class,
                base_types=[self.config.service_base_class],
                comment=f"The {service.title or service.name} Service.",
            )
        )
        for resource in service.resources:
            if resource.path in self.config.ignore_resources:
                continue
            self._guarded(model, resource.path, lambda r=resource: self._generate_resource(model, r, None))

        # After the resources, so only the ones that survived get a property
        self._guarded(
            model,
            service.name,
            lambda: self.pipeline.decorate_service(model, service, service_decl, self.context),
        )

        for schema in service.schemas:
            if schema.name in self.config.ignore_schemas:
                continue
            self._guarded(model, schema.source_path, lambda s=schema: self._generate_schema(model, s))

        logger.debug(f"Built {len(model)} declarations for {service.name}")
        return model

    def namespace(self) -> str:
        """Namespace of the generated code: configured, or <root>.<Service>.<version>."""
        if self.config.namespace:
            return self.config.namespace
        service = self.context.service
        parts = [self.config.root_namespace, snake_to_pascal_case(service.name)]
        version = re.sub(r"[^A-Za-z0-9_]", "_", service.version)
        if version:
            parts.append(f"v{version}" if version[0].isdigit() else version)
        return ".".join(p for p in parts if p)

    def usings(self) -> list[str]:
        """Default using directives followed by the configured ones, without duplicates."""
        return list(dict.fromkeys(DEFAULT_USINGS + list(self.config.additional_usings)))

    def _generate_resource(self, model: CodeModel, resource: ResourceDef, parent: int | None) -> None:
        """Generate a resource class with its sub-resources and request classes."""
        decl = model.add_class(
            ClassDecl(
                name=self.context.names.resource_names[resource.path],
                comment=f'The "{resource.name}" collection of methods.',
            ),
            parent=parent,
        )

        for sub_resource in resource.resources:
            if sub_resource.path in self.config.ignore_resources:
                continue
            self._guarded(model, sub_resource.path, lambda r=sub_resource: self._generate_resource(model, r, decl))

        self.pipeline.decorate_resource(model, resource, decl, self.context)

        for method in resource.methods:
            self._guarded(
                model,
                f"{resource.path}.{method.name}",
                lambda m=method: self._generate_method(model, resource, m, decl),
            )

    def _generate_method(self, model: CodeModel, resource: ResourceDef, method: MethodDef, resource_decl: int) -> None:
        """Generate the request class of a method, nested in its resource class."""
        location = f"{resource.path}.{method.name}"
        response = self.context.resolver.class_name(method.response, location) if method.response else "string"
        class_name = model.safe_member_name(
            resource_decl,
            f"{snake_to_pascal_case(method.name)}Request",
            self.config.unique_suffix,
        )
        request_decl = model.add_class(
            ClassDecl(name=class_name, base_types=[f"{self.config.request_base_class}<{response}>"]),
            parent=resource_decl,
        )
        self.pipeline.decorate_request(model, resource, method, request_decl, resource_decl, self.context)

    def _generate_schema(self, model: CodeModel, schema: SchemaDef) -> None:
        """Generate a schema class. Referenced schemas are named, never expanded."""
        interface = self.config.schema_base_interface
        decl = model.add_class(
            ClassDecl(
                name=self.context.names.schema_names[schema.name],
                base_types=[interface] if interface else [],
            )
        )
        self.pipeline.decorate_schema(model, schema, decl, self.context)

    def _guarded(self, model: CodeModel, location: str, build: Callable[[], None]) -> bool:
        """Run one generation step; on error, discard what it added and report it."""
        mark = model.mark()
        try:
            build()
        except GeneratorError as e:
            model.rollback(mark)
            if not e.location:
                e.location = location
            self.report.add(e)
            return False
        return True

    def _assemble_units(self, rendered: list[tuple[str, str]]) -> list[SourceUnit]:
        if not rendered:
            return []

        namespace = self.namespace()
        usings = self.usings()
        comment = self._generate_command_comment()

        if self.config.one_file_per_type:
            return [
                SourceUnit(
                    file_name=self.renderer.file_name(name),
                    text=self.renderer.assemble([text], namespace=namespace, usings=usings, generation_comment=comment),
                )
                for name, text in rendered
            ]

        return [
            SourceUnit(
                file_name=self.renderer.file_name(self.context.names.service_class),
                text=self.renderer.assemble(
                    [text for _, text in rendered],
                    namespace=namespace,
                    usings=usings,
                    generation_comment=comment,
                ),
            )
        ]

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        command_line = self.command_line if self.command_line is not None else current_command_line()
        return f"// Generated by discovery_to_code v{__version__} : {command_line}"

    @staticmethod
    def _document_name(document: Any) -> str:
        if isinstance(document, dict) and isinstance(document.get("name"), str):
            return document["name"]
        return ""


def current_command_line() -> str:
    """The command line of the running CLI invocation, or the bare program name."""
    try:
        from ..discovery_to_code import discovery_to_code as click_command  # noqa

        return reconstruct_command_line(click_command)
    except (ImportError, AttributeError):
        return "discovery_to_code"


def generate_services(
    documents: Sequence[dict[str, Any]],
    config: CodeGeneratorConfig | None = None,
    max_workers: int | None = None,
) -> list[GenerationResult]:
    """
    Generate several services, each in its own worker.

    Every worker owns its generator, schema model and code model; only the
    read-only config is shared.

    Args:
        documents: Parsed discovery documents
        config: Code generation configuration shared by all workers
        max_workers: Worker count (None lets the executor decide, 1 runs inline)

    Returns:
        One GenerationResult per document, in input order
    """
    # Click contexts are thread-local, so the command line is captured here
    command_line = current_command_line()

    def run_one(document: dict[str, Any]) -> GenerationResult:
        return PipelineGenerator(document, config, command_line=command_line).generate()

    if max_workers == 1 or len(documents) <= 1:
        return [run_one(document) for document in documents]

    logger.debug(f"Generating {len(documents)} services in parallel (workers={max_workers or 'auto'})")
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(run_one, document) for document in documents]
        return [future.result() for future in futures]
