from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # BigCommerce
    bc_store_hash: str = Field("")
    bc_token: str = Field("")
    bc_api_base_url: str = Field("https://api.bigcommerce.com/stores")
    bc_page_size: int = Field(250, gt=0)

    # Shopify
    shopify_store: str = Field("")
    shopify_admin_token: str = Field("")
    shopify_api_version: str = Field("2024-10")
    shopify_min_request_interval: float = Field(0.0, ge=0)

    # Migration
    metafield_namespace: str = Field("Bigc")
    metafield_batch_size: int = Field(100, gt=0)
    rate_delay_seconds: float = Field(0.3, ge=0)
    request_timeout_seconds: float = Field(30.0, gt=0)

    # API
    api_host: str = Field("0.0.0.0")
    api_port: int = Field(8000)
    debug: bool = Field(False)
    log_level: str = Field("INFO")

    # App
    app_name: str = Field("BigCommerce to Shopify Migration")
    version: str = Field("1.0.0")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def bigcommerce_base_url(self) -> str:
        return f"{self.bc_api_base_url.rstrip('/')}/{self.bc_store_hash}/v3"

    @property
    def shopify_base_url(self) -> str:
        return f"https://{self.shopify_store}.myshopify.com/admin/api/{self.shopify_api_version}"

    def missing_credentials(self) -> List[str]:
        """Names of the environment variables that still have to be provided."""
        required = {
            "BC_STORE_HASH": self.bc_store_hash,
            "BC_TOKEN": self.bc_token,
            "SHOPIFY_STORE": self.shopify_store,
            "SHOPIFY_ADMIN_TOKEN": self.shopify_admin_token,
        }
        return [name for name, value in required.items() if not value]


settings = Settings()
