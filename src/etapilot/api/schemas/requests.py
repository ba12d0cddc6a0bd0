"""Request schemas for the API."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ...models import StockStatus


class ProductInput(BaseModel):
    """The product being previewed."""
    handle: str = Field(..., description="Product handle, e.g., 'blue-shirt'")
    tags: list[str] = Field(default=[], description="Product tags")
    stock_status: Optional[StockStatus] = Field(
        default=None, description="in_stock|out_of_stock|pre_order|mixed_stock"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"handle": "blue-shirt", "tags": ["sale"], "stock_status": "in_stock"},
            ]
        }
    }


class PreviewRequest(BaseModel):
    """Request to preview a product's delivery messaging."""
    config: dict[str, Any] = Field(..., description="Rule config (version 1 or 2)")
    settings: Optional[dict[str, Any]] = Field(
        default=None, description="Global settings; the service defaults when omitted"
    )
    product: ProductInput
    now: Optional[datetime] = Field(
        default=None,
        description="Evaluation time. Naive values are shop-local; aware values are converted",
    )
    cart_total: Optional[int] = Field(
        default=None, ge=0, description="Cart total in minor units, enables free delivery progress"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "config": {
                        "version": 1,
                        "rules": [
                            {
                                "id": "r1",
                                "name": "Everything",
                                "match": {"is_fallback": True},
                                "settings": {"message_line_1": "Arrives {arrival}"},
                            }
                        ],
                    },
                    "settings": {"cutoff_time": "14:00", "bank_holiday_country": "GB"},
                    "product": {"handle": "blue-shirt"},
                    "now": "2025-01-13T10:00:00",
                }
            ]
        }
    }


class MigrateRequest(BaseModel):
    """Request to migrate a config to version 2."""
    config: dict[str, Any] = Field(..., description="Rule config (version 1 or 2)")
    profile_id: Optional[str] = Field(
        default=None, description="Fixed ID for the generated profile"
    )
