from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "AI Readiness"
    debug: bool = False
    log_level: str = "INFO"

    # File checks (robots.txt, sitemap.xml, llms.txt)
    fetch_timeout: float = 3.0
    max_robots_sitemaps: int = 10
    user_agent: str = "Mozilla/5.0 (compatible; AIReadinessBot/1.0)"

    # Analysis output
    html_preview_length: int = 10_000

    # Firecrawl scraping service
    firecrawl_api_key: str = ""
    firecrawl_api_url: str = "https://api.firecrawl.dev"
    scrape_timeout: int = 60


settings = Settings()
