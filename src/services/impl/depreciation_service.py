"""감가 적용 서비스 - 아이템 배치 단위 감가액 계산

아이템 하나의 실패가 배치 전체를 실패시키지 않습니다.
- 검증 실패 아이템: 카테고리/감가율/감가액 null, strategy default
- 처리 중 예외: 기본 카테고리, 감가율 0, 감가액 0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from src.core.exceptions import InvalidQueryException
from src.core.logging import logger, sanitize_for_log
from src.schemas.category_schema import (
    DepreciationItem,
    DepreciationResult,
    MatchStrategy,
    item_field,
)
from src.services.impl.category_service import CategoryService

UNKNOWN_ITEM_ID = "unknown"


@dataclass(frozen=True)
class AcceptedItem:
    item: DepreciationItem


@dataclass(frozen=True)
class RejectedItem:
    item_id: str
    reason: str


ScreenedItem = Union[AcceptedItem, RejectedItem]


def coerce_price(value: Any) -> Optional[float]:
    """totalReplacementPrice를 숫자로 (CSV/엑셀에서 온 "1000" 같은 문자열 포함)

    bool, 빈 문자열, 숫자가 아닌 문자열, NaN/inf, 음수는 None
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def screen_item(raw: Any) -> ScreenedItem:
    """입력 1건을 AcceptedItem / RejectedItem으로 분류 (예외 없음)"""
    if not isinstance(raw, dict):
        return RejectedItem(UNKNOWN_ITEM_ID, "item must be an object")

    item_id = item_field(raw, "itemId", "item_id")
    if item_id is None or str(item_id).strip() == "":
        return RejectedItem(UNKNOWN_ITEM_ID, "itemId is required")

    price = item_field(raw, "totalReplacementPrice", "total_replacement_price")
    amount = coerce_price(price)
    if amount is None:
        return RejectedItem(str(item_id), f"invalid totalReplacementPrice: {price!r}")

    return AcceptedItem(
        DepreciationItem(
            item_id=str(item_id),
            total_replacement_price=amount,
            description=item_field(raw, "description"),
            model=item_field(raw, "model"),
            room=item_field(raw, "room"),
            category_hint=item_field(raw, "categoryHint", "category_hint"),
            explicit_category=item_field(raw, "explicitCategory", "explicit_category", "depCat"),
            allow_override=item_field(raw, "allowOverride", "allow_override") is not False,
            force_override=item_field(raw, "forceOverride", "force_override", "overrideDep") is True,
        )
    )


def depreciation_amount(price: float, rate: float) -> float:
    """감가액 = price * rate (소수 둘째 자리 반올림)"""
    return round(price * rate, 2)


class DepreciationService:
    """감가 적용기"""

    def __init__(self, category_service: Optional[CategoryService] = None):
        self.category_service = category_service or CategoryService()

    async def apply_depreciation(self, items: Any) -> list[DepreciationResult]:
        """
        아이템 배치에 감가 적용 (입력 순서 유지)

        Args:
            items: [{itemId, totalReplacementPrice, description, model, room,
                     categoryHint, explicitCategory, allowOverride}, ...]

        Returns:
            아이템별 DepreciationResult

        Raises:
            InvalidQueryException: items가 리스트가 아닌 경우 (호출자 오류)
        """
        if not isinstance(items, (list, tuple)):
            raise InvalidQueryException("items must be a list")

        results: list[DepreciationResult] = []
        for raw in items:
            results.append(await self._apply_one(raw))

        rejected = sum(1 for r in results if r.error)
        logger.info(f"[DEP] applied depreciation: items={len(results)}, rejected={rejected}")
        return results

    async def _apply_one(self, raw: Any) -> DepreciationResult:
        screened = screen_item(raw)
        if isinstance(screened, RejectedItem):
            logger.warning(f"[DEP] item rejected: itemId={sanitize_for_log(screened.item_id)}, {screened.reason}")
            return DepreciationResult(item_id=screened.item_id, error=screened.reason)

        item = screened.item
        try:
            match = await self.category_service.infer_category(
                description=item.description,
                model=item.model,
                room=item.room,
                category_hint=item.category_hint,
                explicit_category=item.explicit_category,
                allow_override=item.allow_override,
                force_override=item.force_override,
            )
            return DepreciationResult(
                item_id=item.item_id,
                category_name=match.category_name,
                depreciation_rate=match.depreciation_rate,
                depreciation_amount=depreciation_amount(item.total_replacement_price, match.depreciation_rate),
                strategy_used=match.strategy_used,
                matched_tokens=match.matched_tokens,
                candidates=match.candidates,
            )
        except Exception as e:
            logger.error(f"[DEP] Error processing item {sanitize_for_log(item.item_id)}: {type(e).__name__}: {e}")
            snapshot = self.category_service.snapshots.current
            default_name = snapshot.sentinel.name if snapshot else self.category_service.snapshots.default_name
            return DepreciationResult(
                item_id=item.item_id,
                category_name=default_name,
                depreciation_rate=0.0,
                depreciation_amount=0.0,
                strategy_used=MatchStrategy.DEFAULT,
                error=str(e),
            )
