from pydantic import BaseModel, ConfigDict

class MarketOut(BaseModel):
    id: int
    name: str
    type: str
    status: str

    model_config = ConfigDict(from_attributes=True)
