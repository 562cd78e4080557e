# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import Field

# constrained types
PositiveInt = Annotated[int, Field(strict=True, ge=0)]
PositiveIntGe1 = Annotated[int, Field(strict=True, ge=1)]
Year = Annotated[int, Field(strict=True, ge=1900, le=2200)]
PositiveDecimal = Annotated[Decimal, Field(ge=0)]
DecimalBetween0And1 = Annotated[Decimal, Field(ge=0, le=1)]
GrowthDecimal = Annotated[Decimal, Field(gt=-1, le=1)]
