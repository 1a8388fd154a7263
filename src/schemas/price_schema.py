"""Pydantic 스키마 정의 - 가격 탐색/검증"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class PriceOperator(str, Enum):
    """가격 조건 연산자 (알 수 없는 값은 모든 가격을 통과시킴)"""

    BETWEEN = "between"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"


class SearchResult(BaseModel):
    """검색 전략 하나가 만든 결과 항목 (요청 범위 내에서만 사용)"""
    title: str = Field("", description="결과 제목")
    link: str = Field(..., description="결과 URL")
    snippet: str = Field("", description="요약")


class ExtractedProduct(BaseModel):
    """페이지 1건에서 추출한 상품 정보 (생성 후 불변)"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    url: str = Field(..., description="상품 페이지 URL")
    source: str = Field(..., description="출처 도메인")
    price: Optional[str] = Field(None, description="원문 가격 문자열 ($...)")
    description: str = Field("Unknown", description="상품명")
    category: str = Field("Unknown", description="카테고리")
    sub_category: str = Field("Unknown", alias="subCategory", description="하위 카테고리")
    pricer_tag: str = Field("AI-Enhanced", alias="pricerTag", description="가격 산정 태그")

    def to_table_row(self) -> dict[str, str]:
        """결과 표 한 줄 (누락 필드는 N/A, Unknown 등으로 채움)"""
        return {
            "Price": self.price or "N/A",
            "Cat": self.category or "Unknown",
            "Sub Cat": self.sub_category or "Unknown",
            "Source": self.source or "Unknown",
            "URL": self.url or "N/A",
            "Pricer": self.pricer_tag or "AI-Enhanced",
            "Description": self.description or "No description available",
        }


class PriceCriteria(BaseModel):
    """가격 조건"""
    model_config = ConfigDict(populate_by_name=True)

    min_price: Optional[float] = Field(None, alias="min", description="하한")
    max_price: Optional[float] = Field(None, alias="max", description="상한")
    operator: str = Field(PriceOperator.BETWEEN.value, description="between | less_than | greater_than")


class ValidationResponse(BaseModel):
    """가격 검증 결과 - 결과 캐시의 저장 단위"""
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., description="검색한 설명")
    price_criteria: PriceCriteria = Field(..., alias="priceCriteria")
    total_found: int = Field(..., ge=0, alias="totalFound")
    products: list[ExtractedProduct] = Field(default_factory=list)
    timestamp: str = Field(..., description="생성 시각 (ISO 8601)")
    search_time_marker: int = Field(..., alias="searchTimeMarker", description="생성 시각 (epoch ms)")

    @model_validator(mode="after")
    def _check_total(self) -> "ValidationResponse":
        if self.total_found != len(self.products):
            raise ValueError("totalFound must equal the number of products")
        return self


class ValidationErrorResponse(BaseModel):
    """검증 자체가 불가능할 때 반환하는 오류 페이로드"""
    error: str = Field(..., description="오류 요약")
    query: str = Field("", description="검색한 설명")
    details: str = Field("", description="상세 사유")
    timestamp: str = Field(..., description="생성 시각 (ISO 8601)")
