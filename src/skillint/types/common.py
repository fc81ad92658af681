"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["low", "medium", "high"]
DocumentKind: TypeAlias = Literal["skill", "companion", "standard"]
LinkKind: TypeAlias = Literal["inline", "image", "reference"]
RuleScope: TypeAlias = Literal["document", "corpus"]
RuleDisableSource: TypeAlias = Literal["config", "cli-disable", "cli-only"]
