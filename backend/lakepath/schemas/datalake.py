"""Data lake account/container addressing."""

from pydantic import BaseModel, field_validator

DFS_ENDPOINT_SUFFIX = "dfs.core.windows.net"


class DataLakeConfig(BaseModel):
    """Identifies one container (file system) of a storage account."""
    account: str
    container: str

    @field_validator("account", "container")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def account_url(self) -> str:
        account = self.account
        if account.startswith("https://"):
            return account.rstrip("/")
        return f"https://{account}.{DFS_ENDPOINT_SUFFIX}"

    @property
    def base_url(self) -> str:
        return f"{self.account_url}/{self.container}"
