"""
Chart Config Models
===================
Pydantic base classes shared by every chart type's mapping and config.

Field names are snake_case in Python and camelCase on the wire
(`index_by` <-> `indexBy`), so configs saved by the dashboard load
unchanged.
"""

from typing import Any, Dict, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

M = TypeVar("M", bound="ChartModel")


class ChartModel(BaseModel):
    """Base for all chart models: camelCase aliases, either name accepted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def coerce(cls: Type[M], value: Union[M, Dict[str, Any], None]) -> M:
        """Accept an instance, a plain dict, or None (all defaults)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, BaseModel):
            value = value.model_dump(by_alias=True)
        return cls.model_validate(value or {})

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class DataMapping(ChartModel):
    """Column-name references feeding each visual channel."""


# ----- Styling (free-form, carried through untouched) -----

class Margin(ChartModel):
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None


class ColorConfig(ChartModel):
    scheme: Optional[str] = None
    custom_colors: Optional[List[str]] = None


class BaseChartConfig(ChartModel):
    """
    Fields common to every chart config.

    Styling keys the processors do not read (axes, legends, theme
    overrides) are kept as extras so the renderer receives them back.
    """

    model_config = ConfigDict(extra="allow")

    title: str = ""
    description: Optional[str] = None
    margin: Optional[Margin] = None
    theme: Optional[Literal["light", "dark", "custom"]] = None
    colors: Optional[ColorConfig] = None
    animate: Optional[bool] = None
    motion_config: Optional[str] = None


class ScaleConfig(ChartModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None


class SortingConfig(ChartModel):
    enabled: bool = True
    direction: Literal["asc", "desc"] = "asc"
    sort_by: Literal["index", "value"] = Field(default="index")
    value_column: Optional[str] = None
