from sqlmodel import Field, SQLModel


class Setting(SQLModel, table=True):
    """Runtime key/value configuration (check interval, SMS credentials...)."""

    __tablename__ = "settings"

    key: str = Field(primary_key=True)
    value: str
