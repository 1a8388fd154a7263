"""Pydantic 스키마 정의 - 감가 카테고리 추론/적용"""
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class MatchStrategy(str, Enum):
    """카테고리 추론 전략 (우선순위 순)"""

    MANUAL_OVERRIDE = "manual_override"
    CATEGORY_HINT = "category_hint"
    EXAMPLES_KEYWORD = "examples_keyword"
    DEFAULT = "default"


class CategoryRecord(BaseModel):
    """감가 카테고리 1건 + 매칭용 파생 필드

    스냅샷 안에서만 사용되며 reload 전까지 변경되지 않습니다.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(0, description="저장소 ID (합성 레코드는 0)")
    code: Optional[str] = Field(None, description="카테고리 코드 (예: ELC)")
    name: str = Field(..., description="카테고리명")
    depreciation_rate: float = Field(0.0, ge=0.0, le=1.0, alias="depreciationRate")
    useful_life: str = Field("", alias="usefulLife")
    examples_text: str = Field("", alias="examplesText")

    # 파생 필드
    normalized_name: str = Field("", alias="normalizedName")
    name_tokens: tuple[str, ...] = Field((), alias="nameTokens")
    example_tokens: frozenset[str] = Field(frozenset(), alias="exampleTokens")


class CategoryCandidate(BaseModel):
    """후보 카테고리 (점수 포함)"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    score: float
    depreciation_rate: float = Field(..., alias="depreciationRate")
    matched_tokens: Optional[list[str]] = Field(None, alias="matchedTokens")


class CategoryMatch(BaseModel):
    """카테고리 추론 결과 (코어는 저장하지 않음)"""
    model_config = ConfigDict(populate_by_name=True)

    category_name: str = Field(..., alias="categoryName")
    depreciation_rate: float = Field(..., alias="depreciationRate")
    strategy_used: MatchStrategy = Field(..., alias="strategyUsed")
    matched_tokens: list[str] = Field(default_factory=list, alias="matchedTokens")
    candidates: list[CategoryCandidate] = Field(default_factory=list)


class DepreciationItem(BaseModel):
    """감가 적용 대상 아이템 (검증 통과 후 형태)"""
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(..., alias="itemId")
    total_replacement_price: float = Field(..., ge=0, alias="totalReplacementPrice")
    description: Optional[str] = None
    model: Optional[str] = None
    room: Optional[str] = None
    category_hint: Optional[str] = Field(None, alias="categoryHint")
    explicit_category: Optional[str] = Field(None, alias="explicitCategory")
    allow_override: bool = Field(True, alias="allowOverride")
    force_override: bool = Field(False, alias="forceOverride")


class DepreciationResult(BaseModel):
    """아이템별 감가 결과"""
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(..., alias="itemId")
    category_name: Optional[str] = Field(None, alias="categoryName")
    depreciation_rate: Optional[float] = Field(None, alias="depreciationRate")
    depreciation_amount: Optional[float] = Field(None, alias="depreciationAmount")
    strategy_used: MatchStrategy = Field(MatchStrategy.DEFAULT, alias="strategyUsed")
    matched_tokens: list[str] = Field(default_factory=list, alias="matchedTokens")
    candidates: list[CategoryCandidate] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="검증 실패/처리 실패 사유")


class ReloadResult(BaseModel):
    """스냅샷 재로드 결과"""
    reloaded: bool = True
    count: int = Field(..., ge=0)


def item_field(raw: dict[str, Any], *names: str) -> Any:
    """snake_case/camelCase 어느 쪽으로 들어와도 값을 꺼냄"""
    for name in names:
        if name in raw:
            return raw[name]
    return None
