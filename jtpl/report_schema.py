"""
Схема JSON-отчета команды `jtpl check`.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: str
    message: str
    line: int
    column: int
    open_block: Optional[str] = None


class CheckReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    template: str
    ok: bool
    error: Optional[CheckError] = None
    # Количество узлов по видам: {"TextNode": 3, "LoopNode": 1, ...}
    nodes: Dict[str, int] = Field(default_factory=dict)
    # Пути include в порядке следования в документе
    includes: List[str] = Field(default_factory=list)


__all__ = ["CheckError", "CheckReport"]
