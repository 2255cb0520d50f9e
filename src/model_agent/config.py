from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass
class GenConfig:
    use_json_tag: bool = True
    use_orm_tag: bool = False
    sort_fields: bool = False   # 필드명 기준 안정 정렬
    package_name: str = "models"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    output_dir: Path = Field(default=Path("./out"), alias="MODEL_OUTPUT_DIR")
    package_name: str = Field(default="models", alias="MODEL_PACKAGE_NAME")

    use_json_tag: bool = Field(default=True, alias="MODEL_JSON_TAG")
    use_orm_tag: bool = Field(default=False, alias="MODEL_ORM_TAG")
    sort_fields: bool = Field(default=False, alias="MODEL_SORT_FIELDS")

    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")

    def gen_config(self) -> GenConfig:
        return GenConfig(
            use_json_tag=self.use_json_tag,
            use_orm_tag=self.use_orm_tag,
            sort_fields=self.sort_fields,
            package_name=self.package_name,
        )

settings = Settings()
