# orchestrator/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    환경 변수와 .env 파일에서 읽어오는 프로세스 설정입니다.
    DATABASE_URL은 필수이며, 나머지는 기본값을 가집니다.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = Field(description="카탈로그 저장소의 SQLAlchemy 연결 문자열 (예: postgresql+psycopg2://user:pw@host/db)")
    server_address: str = Field(default="127.0.0.1:7878", description="API가 바인딩할 host:port")
    db_schema: str | None = Field(default="orchestrator", description="테이블이 위치한 스키마 (SQLite에서는 무시)")
    db_pool_size: int = Field(default=16, ge=1, description="동시에 사용할 수 있는 최대 DB 연결 수")
    log_level: str = Field(default="INFO", description="로깅 레벨")

    def listen_address(self) -> tuple[str, int]:
        """SERVER_ADDRESS를 (host, port) 튜플로 분리합니다."""
        host, _, port = self.server_address.rpartition(":")
        if not host or not port.isdigit():
            raise ValueError(f"Invalid SERVER_ADDRESS '{self.server_address}', expected host:port.")
        return host, int(port)
