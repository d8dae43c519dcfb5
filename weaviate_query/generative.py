"""
@file: generative.py
Generative search (RAG) directives and their compiler.

A GenerateDirective asks the server to run the retrieved objects through an AI provider
with a templated prompt. '{property}' tokens in the prompt are interpolated server-side,
so every referenced property must also be selected by the query; compile_generate
returns those properties alongside the clause text.

Modes:
    single:  one result generated from all retrieved objects (singleResult)
    grouped: the grouped task result (groupedResult)

Supported providers (name -> wire key):
    openai, anthropic, cohere, palm, aws_bedrock (aws), azure_openai (azureOpenAI),
    anyscale, huggingface, mistral, ollama, octoai, together, voyage
"""
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .exceptions import ValidationError
from .graphql import BlockString, render_arguments, validate_name

PROVIDERS = {
    "openai": "openai",
    "anthropic": "anthropic",
    "cohere": "cohere",
    "palm": "palm",
    "aws_bedrock": "aws",
    "azure_openai": "azureOpenAI",
    "anyscale": "anyscale",
    "huggingface": "huggingface",
    "mistral": "mistral",
    "ollama": "ollama",
    "octoai": "octoai",
    "together": "together",
    "voyage": "voyage",
}

PROMPT_PROPERTY_RE = re.compile(r"\{([_A-Za-z][_0-9A-Za-z]*)\}")


class GenerateMode(str, Enum):
    SINGLE = "single"
    GROUPED = "grouped"

    @property
    def result_field(self) -> str:
        return "singleResult" if self is GenerateMode.SINGLE else "groupedResult"


def supported_providers() -> List[str]:
    return list(PROVIDERS)


def valid_provider(provider: Any) -> bool:
    return isinstance(provider, str) and provider in PROVIDERS


@dataclass(frozen=True)
class ProviderParams:
    """Optional provider parameters; each is sent only when set."""
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None

    def __post_init__(self):
        if self.model is not None and (not isinstance(self.model, str) or not self.model.strip()):
            raise ValidationError(f"model must be a non-empty string, got {self.model!r}")
        if self.temperature is not None and (
            isinstance(self.temperature, bool) or not isinstance(self.temperature, (int, float))
            or not math.isfinite(self.temperature) or self.temperature < 0
        ):
            raise ValidationError(f"temperature must be a non-negative number, got {self.temperature!r}")
        if self.max_tokens is not None and (
            isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int) or self.max_tokens < 1
        ):
            raise ValidationError(f"max_tokens must be a positive integer, got {self.max_tokens!r}")
        if self.top_p is not None and (
            isinstance(self.top_p, bool) or not isinstance(self.top_p, (int, float))
            or not 0.0 <= self.top_p <= 1.0
        ):
            raise ValidationError(f"top_p must be between 0 and 1, got {self.top_p!r}")

    def to_wire(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.model is not None:
            params["model"] = self.model
        if self.temperature is not None:
            params["temperature"] = float(self.temperature)
        if self.max_tokens is not None:
            params["maxTokens"] = self.max_tokens
        if self.top_p is not None:
            params["topP"] = float(self.top_p)
        return params


@dataclass(frozen=True)
class GenerateDirective:
    """
    Generation request embedded in a query.

    Attributes:
        mode (GenerateMode): single or grouped.
        prompt_template (str): Prompt, optionally with '{property}' tokens.
        provider (str): One of PROVIDERS.
        provider_params (ProviderParams): model, temperature, max_tokens, top_p.
        explicit_properties (tuple): Extra properties to retrieve for interpolation.
    """
    mode: GenerateMode
    prompt_template: str
    provider: str
    provider_params: ProviderParams = field(default_factory=ProviderParams)
    explicit_properties: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.prompt_template is None:
            raise ValidationError("Prompt is required")
        if not isinstance(self.prompt_template, str) or not self.prompt_template.strip():
            raise ValidationError("Prompt cannot be empty")
        if self.provider is None:
            raise ValidationError("Provider is required")
        if not valid_provider(self.provider):
            raise ValidationError(
                f"Invalid provider: {self.provider!r}. Must be one of {supported_providers()}"
            )
        try:
            object.__setattr__(self, "mode", GenerateMode(self.mode))
        except ValueError:
            raise ValidationError(f"Unknown generate mode: {self.mode!r}")
        if not isinstance(self.provider_params, ProviderParams):
            raise ValidationError(f"provider_params must be ProviderParams, got {self.provider_params!r}")
        explicit = (self.explicit_properties,) if isinstance(self.explicit_properties, str) else tuple(self.explicit_properties)
        for prop in explicit:
            validate_name(prop, "property name")
        object.__setattr__(self, "explicit_properties", explicit)


def single_prompt(prompt: str, provider: str, properties: Sequence[str] = (), **params) -> GenerateDirective:
    """Directive generating one result from all retrieved objects."""
    return GenerateDirective(GenerateMode.SINGLE, prompt, provider, ProviderParams(**params), properties)


def grouped_task(prompt: str, provider: str, properties: Sequence[str] = (), **params) -> GenerateDirective:
    """Directive generating the grouped task result."""
    return GenerateDirective(GenerateMode.GROUPED, prompt, provider, ProviderParams(**params), properties)


class CompiledGenerate(NamedTuple):
    clause: str
    properties: List[str]


def extract_prompt_properties(prompt_template: str, explicit_properties: Iterable[str] = ()) -> List[str]:
    """
    Collect the properties a prompt needs.

    Args:
        prompt_template: Prompt text with '{identifier}' tokens.
        explicit_properties: Additional properties to include.

    Returns:
        Property names, de-duplicated in first-occurrence order (prompt tokens first).
    """
    found = PROMPT_PROPERTY_RE.findall(prompt_template) + [str(p) for p in explicit_properties]
    return list(dict.fromkeys(found))


def compile_generate(directive: GenerateDirective) -> CompiledGenerate:
    """
    Compile a directive into its '_additional' selection and interpolation properties.

    Returns:
        CompiledGenerate(clause, properties), where clause looks like
        'generate(singleResult: {openai: {prompt: <block string>}}) { singleResult error }'.
    """
    result_field = directive.mode.result_field
    provider_args = {"prompt": BlockString(directive.prompt_template)}
    provider_args.update(directive.provider_params.to_wire())
    arguments = render_arguments([(result_field, {PROVIDERS[directive.provider]: provider_args})])
    clause = f"generate{arguments} {{ {result_field} error }}"
    return CompiledGenerate(clause, extract_prompt_properties(directive.prompt_template, directive.explicit_properties))


def single_result(rows: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return the generate payload of the first row, where single results are attached."""
    if rows:
        additional = rows[0].get("_additional") or {}
        generate = additional.get("generate") if isinstance(additional, Mapping) else None
        if isinstance(generate, Mapping):
            return dict(generate)
    return {"singleResult": None, "error": "No results"}


def grouped_results(rows: Sequence[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    return list(rows)
