# Render options schema
# Validated command-line input, converted into generator and renderer config

import dataclasses
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from bonsai.color import RGB, parse_hex_color
from bonsai.config import (
    DepthGradient,
    DrawMode,
    FixedColor,
    LeafStyle,
    RandomHue,
    RenderStyle,
    TreeParams,
)
from bonsai.rng import RandomSource

#
# Schemata
#

# Option name -> TreeParams field it overrides
PARAM_FIELDS = {
    "depth": "max_depth",
    "spread": "spread",
    "trunk_width": "trunk_width_pct",
    "trunk_height": "trunk_height_pct",
}


class RenderOptions(BaseModel):
    """Everything needed to produce one frame."""

    preset: Literal["bonsai", "willow", "sapling"] = Field(
        default="bonsai", description="Tree shape preset; explicit shape options override it"
    )
    width: int = Field(default=1280, gt=0, description="Image width in pixels")
    height: int = Field(default=720, gt=0, description="Image height in pixels")
    depth: int = Field(default=6, ge=0, le=12, description="Number of branch levels")
    spread: float = Field(default=1.0, gt=0, description="Branch angle spread multiplier")
    trunk_width: float = Field(
        default=7.0, gt=0, le=100, description="Trunk width as percentage of image width"
    )
    trunk_height: float = Field(
        default=35.0, gt=0, le=100, description="Trunk height as percentage of image height"
    )
    color: str = Field(default="654321", description="Trunk base color (hex)")
    fixed_color: bool = Field(default=False, description="Paint every branch in the base color")
    rainbow: bool = Field(default=False, description="Random hue per branch")
    leaves: bool = Field(default=False, description="Draw leaves on the outer branches")
    leaf_size: float = Field(default=1.0, gt=0, description="Leaf size multiplier")
    leaf_density: int = Field(
        default=0, ge=0, description="Leaves per branch (0 = automatic from resolution)"
    )
    lines: bool = Field(default=False, description="Line mode instead of polygon mode")
    seed: int = Field(default=0, ge=0, lt=2**64, description="Random seed (0 = random)")

    @field_validator("color")
    @classmethod
    def _check_color(cls, v: str) -> str:
        parse_hex_color(v)
        return v

    @model_validator(mode="after")
    def _check_color_mode(self) -> "RenderOptions":
        if self.rainbow and self.fixed_color:
            raise ValueError("rainbow and fixed_color are mutually exclusive")
        return self

    @property
    def base_color(self) -> RGB:
        return parse_hex_color(self.color)

    def to_params(self) -> TreeParams:
        """Preset shape with any explicitly given shape options applied."""
        base = getattr(TreeParams, self.preset)()
        overrides = {
            field: getattr(self, name)
            for name, field in PARAM_FIELDS.items()
            if name in self.model_fields_set
        }
        return dataclasses.replace(base, **overrides)

    def to_style(self) -> RenderStyle:
        if self.rainbow:
            color = RandomHue()
        elif self.fixed_color:
            color = FixedColor(self.base_color)
        else:
            color = DepthGradient(base=self.base_color)
        return RenderStyle(
            mode=DrawMode.LINE if self.lines else DrawMode.POLYGON,
            color=color,
            leaves=LeafStyle(size=self.leaf_size, density=self.leaf_density) if self.leaves else None,
        )

    def to_random(self) -> RandomSource:
        return RandomSource(self.seed)
