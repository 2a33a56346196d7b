from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Any of these marks a development run (enables the local browser transport)
    environment: str = ""
    node_env: str = ""
    supabase_env: str = ""

    log_level: str = "INFO"
    request_timeout: float = 15.0
    max_body_bytes: int = 5 * 1024 * 1024

    browser_timeout_ms: int = 30000
    browser_settle_ms: int = 5000

    good_enough_items: int = 5
    length_fallback: bool = True
    cascade_order: list[str] = ["browser", "embedded_json", "api", "static_html"]

    api_base_url: str = "https://www.ifood.com.br"
    image_cdn_base: str = "https://static.ifood-static.com.br/image/upload/t_thumbnail/logosgde/"
    timezone: str = "America/Sao_Paulo"

    placeholder_name: str = "Restaurante não identificado"
    placeholder_image: str = "https://via.placeholder.com/150x150?text=Sem+Imagem"

    @property
    def is_development(self) -> bool:
        return (
            self.environment.lower() == "development"
            or self.node_env.lower() == "development"
            or self.supabase_env.lower() == "local"
        )
