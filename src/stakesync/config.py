from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_url: str = "http://localhost:8080"
    api_username: str = ""
    api_password: str = ""
    delegation_legacy_contract_address: str = ""
    lkmex_staking_contract_address: str = ""  # empty disables the LKMEX source
    es_url: str = "http://localhost:9200"
    es_username: str = ""
    es_password: str = ""
    accounts_index: str = "accounts"
    address_hrp: str = "erd"
    address_length: int = 32
    fetch_batch_size: int = 2000
    bulk_batch_size: int = 2000
    skip_failed_read_batches: bool = False
    http_timeout: float = 60.0
    http_rate_per_second: float = 10.0
    run_timeout: float | None = None
    log_level: str = "INFO"

    @property
    def api_credentials(self) -> tuple[str, str] | None:
        if not self.api_username:
            return None
        return self.api_username, self.api_password

    @property
    def es_credentials(self) -> tuple[str, str] | None:
        if not self.es_username:
            return None
        return self.es_username, self.es_password

    class Config:
        env_file = ".env"


settings = Settings()
