from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings

from rooclino.parsing.cbor import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, DecodeOptions


class ServerSettings(BaseSettings):
    server_ip: str = Field("127.0.0.1", validation_alias="SERVER_IP")
    server_port: int = Field(10380, validation_alias="SERVER_PORT")

    log_ring_size: int = Field(200, validation_alias="LOG_RING_SIZE")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    decode_max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT, validation_alias="DECODE_MAX_DEPTH")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")

    def decode_options(self) -> DecodeOptions:
        return DecodeOptions(max_depth=self.decode_max_depth)


@lru_cache
def get_settings() -> ServerSettings:
    return ServerSettings()
