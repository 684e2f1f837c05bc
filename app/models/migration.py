from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any


class ItemState(str, Enum):
    MAPPING = "mapping"
    PRODUCT_CREATED = "product_created"
    VARIANTS_ATTACHED = "variants_attached"
    COLLECTIONS_LINKED = "collections_linked"
    METAFIELDS_WRITTEN = "metafields_written"
    DONE = "done"
    FAILED = "failed"


class ItemOutcome(BaseModel):
    index: int
    name: str = ""
    source_id: Optional[int] = None
    shopify_id: Optional[int] = None
    state: ItemState = ItemState.MAPPING
    error: Optional[str] = None
    images_uploaded: int = 0
    variants_attached: int = 0
    collections_linked: int = 0
    metafields_written: int = 0

    @property
    def succeeded(self) -> bool:
        return self.state == ItemState.DONE


class MigrationReport(BaseModel):
    total_products: int = 0
    succeeded: int = 0
    failed: int = 0
    catalog_complete: bool = True
    execution_time: float = 0.0
    items: List[ItemOutcome] = []

    def record(self, outcome: ItemOutcome) -> None:
        self.items.append(outcome)
        if outcome.succeeded:
            self.succeeded += 1
        else:
            self.failed += 1


class MigrationResponse(BaseModel):
    status: str
    message: str
    total_products: int
    successful_uploads: int = 0
    failed_uploads: int = 0
    catalog_complete: bool = True
    execution_time: float
    results: List[Dict[str, Any]] = Field(default_factory=list)
