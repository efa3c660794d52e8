"""Human-readable explanations for comparison items.

Turns a comparison outcome into a sentence such as
"Vehicle age is NOT less than Maximum age" and a structured record of both
operands. Intended as the response_props_getter of a ComparatorExtension so
every failed ItemResult carries its own explanation.

Wording (comparator phrases, negation word, sentence template) is plain
configuration: ExplanationConfig can be loaded from YAML, and defaults are
used when nothing is configured.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, NamedTuple, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from group_validator.comparator import Comparator, PropsGetterParams, coerce_comparator

logger = logging.getLogger(__name__)

Id = Union[int, str]

_DEFAULT_TRANSLATIONS: Dict[Comparator, str] = {
    Comparator.EQ: "equal to",
    Comparator.NE: "not equal to",
    Comparator.GT: "greater than",
    Comparator.GE: "greater than or equal to",
    Comparator.LT: "less than",
    Comparator.LE: "less than or equal to",
}


@dataclass
class ExplanationConfig:
    """Wording used to render comparison messages.

    ``message_template`` may use {actual_name}, {expected_name}, {phrase}
    (the possibly negated comparator phrase) and {comparator} (the symbol).
    """

    message_template: str = "{actual_name} is {phrase} {expected_name}"
    negative_word: str = "NOT"
    translations: Dict[Comparator, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ExplanationConfig":
        """Create config from dictionary (comparator symbols as translation keys)."""
        raw_translations = config.get("translations") or {}
        if not isinstance(raw_translations, Mapping):
            raise ValueError(
                f"translations must be a mapping, got {type(raw_translations).__name__}"
            )
        translations = {
            coerce_comparator(symbol): phrase
            for symbol, phrase in raw_translations.items()
        }
        return cls(
            message_template=config.get("message_template", cls.message_template),
            negative_word=config.get("negative_word", cls.negative_word),
            translations=translations,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "ExplanationConfig":
        """Load config from a YAML file; missing file means defaults.

        Raises:
            ValueError: If the file does not hold a mapping
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f"Explanation config not found: {path}, using defaults")
            return cls.default()
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Explanation config {path} must be a mapping, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "ExplanationConfig":
        return cls()


def get_translated_comparator(
    comparator: Any, config: Optional[ExplanationConfig] = None
) -> str:
    """Natural-language phrase for a comparator, e.g. ">=" -> "greater than or equal to"."""
    comparator = coerce_comparator(comparator)
    if config is not None and comparator in config.translations:
        return config.translations[comparator]
    return _DEFAULT_TRANSLATIONS[comparator]


def get_human_readable_message(
    comparator: Any,
    actual_name: str,
    expected_name: str,
    override_translation: Optional[Callable[[Comparator], str]] = None,
    use_negative: bool = False,
    config: Optional[ExplanationConfig] = None,
) -> str:
    """
    Render a comparison as a sentence.

    Args:
        comparator: Comparator of the item
        actual_name: Display name of the first operand
        expected_name: Display name of the second operand
        override_translation: Optional function replacing the comparator phrase
        use_negative: Insert the negation word before the phrase
        config: Wording configuration (defaults when omitted)

    Returns:
        e.g. "Age is NOT greater than Limit"
    """
    config = config or ExplanationConfig.default()
    comparator = coerce_comparator(comparator)

    translated = None
    if override_translation is not None:
        translated = override_translation(comparator)
    if not translated:
        translated = get_translated_comparator(comparator, config)

    phrase = f"{config.negative_word} {translated}" if use_negative else translated
    return config.message_template.format(
        actual_name=actual_name,
        expected_name=expected_name,
        phrase=phrase,
        comparator=comparator.value,
    )


class OperandIds(NamedTuple):
    actual_id: Optional[Id]
    expected_id: Optional[Id] = None


class OperandNames(NamedTuple):
    actual_name: str
    expected_name: str


class OperandInfo(BaseModel):
    """One side of a comparison."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name of the operand")
    id: Optional[Id] = Field(None, description="Caller id of the operand, if any")
    value: Any = Field(None, description="Value the comparison was made with")


class DetailedResponse(BaseModel):
    """Structured explanation of a single comparison item."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error_message: Optional[str] = Field(
        None, description="Human-readable failure message, None when the comparison held"
    )
    operand1: OperandInfo
    operand2: OperandInfo
    comparator: Comparator
    item: Any = Field(..., description="The caller's item")


@dataclass(frozen=True)
class DetailedResponseParams:
    """Lookups describing the operands of an item.

    Attributes:
        get_operand_ids: item -> OperandIds (or mapping with actual_id/expected_id)
        get_operand_display_names: item -> OperandNames (or mapping with
            actual_name/expected_name)
    """

    get_operand_ids: Callable[[Any], Any]
    get_operand_display_names: Callable[[Any], Any]


def _read_ids(value: Any) -> OperandIds:
    if isinstance(value, Mapping):
        return OperandIds(value.get("actual_id"), value.get("expected_id"))
    return OperandIds(*value)


def _read_names(value: Any) -> OperandNames:
    if isinstance(value, Mapping):
        return OperandNames(value["actual_name"], value["expected_name"])
    return OperandNames(*value)


def get_detailed_error(
    success: bool,
    comparator: Any,
    item: Any,
    operand1: Any,
    operand2: Any,
    get_operand_ids: Callable[[Any], Any],
    get_operand_display_names: Callable[[Any], Any],
    config: Optional[ExplanationConfig] = None,
) -> DetailedResponse:
    """
    Build the explanation record for one comparison.

    A failed "!=" is worded positively ("A is equal to B") rather than as a
    double negative.

    Returns:
        DetailedResponse with error_message None when success is True
    """
    comparator = coerce_comparator(comparator)
    actual_id, expected_id = _read_ids(get_operand_ids(item))
    actual_name, expected_name = _read_names(get_operand_display_names(item))

    error_message = None
    if not success:
        override_translation = None
        use_negative = True
        if comparator == Comparator.NE:
            override_translation = lambda _: get_translated_comparator(Comparator.EQ, config)
            use_negative = False

        error_message = get_human_readable_message(
            comparator=comparator,
            actual_name=actual_name,
            expected_name=expected_name,
            override_translation=override_translation,
            use_negative=use_negative,
            config=config,
        )

    return DetailedResponse(
        error_message=error_message,
        operand1=OperandInfo(name=actual_name, id=actual_id, value=operand1),
        operand2=OperandInfo(name=expected_name, id=expected_id, value=operand2),
        comparator=comparator,
        item=item,
    )


def detailed_error_props_getter(
    params: DetailedResponseParams, config: Optional[ExplanationConfig] = None
) -> Callable[[PropsGetterParams], Dict[str, Any]]:
    """
    Build a response_props_getter attaching a DetailedResponse to each item.

    The returned fields (error_message, operand1, operand2, comparator, item)
    end up as extra fields of every ItemResult.
    """

    def props_getter(props: PropsGetterParams) -> Dict[str, Any]:
        detailed = get_detailed_error(
            success=props.success,
            comparator=props.comparator,
            item=props.item,
            operand1=props.operand1,
            operand2=props.operand2,
            get_operand_ids=params.get_operand_ids,
            get_operand_display_names=params.get_operand_display_names,
            config=config,
        )
        return {
            "error_message": detailed.error_message,
            "operand1": detailed.operand1,
            "operand2": detailed.operand2,
            "comparator": detailed.comparator,
            "item": detailed.item,
        }

    return props_getter
