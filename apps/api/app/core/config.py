from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "api-docs-generator"
    ENV: str = "dev"

    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "api_docs_generator"

    HUGGINGFACE_API_KEY: str | None = None
    HF_MODEL: str = "mistralai/Mistral-7B-Instruct-v0.2"
    HF_INFERENCE_URL: str = "https://router.huggingface.co/hf-inference/models"
    HF_TIMEOUT_SECONDS: float = 300.0

    GEN_MAX_TOKENS: int = 4000
    GEN_TEMPERATURE: float = 0.7
    GEN_TOP_P: float = 0.95

    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

settings = Settings()
