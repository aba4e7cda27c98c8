"""Wire types of the chain gateway REST API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiEnvelope(BaseModel):
    """Every gateway response: ``{data, error, code}``."""

    data: Any = None
    error: str = ""
    code: str = ""


class VmQueryRequest(BaseModel):
    """Read-only smart-contract view call."""

    model_config = ConfigDict(populate_by_name=True)

    sc_address: str = Field(alias="scAddress")
    func_name: str = Field(alias="funcName")
    caller: str = ""
    value: str = ""
    args: list[str] = []

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ValidatorStake(BaseModel):
    address: str
    staked: str = ""
    top_up: str = Field("", alias="topUp")
    total: str = ""


class DelegatedTo(BaseModel):
    delegation_sc_address: str = Field("", alias="delegatorAddress")
    value: str = ""


class DelegatorStake(BaseModel):
    delegator_address: str = Field(alias="delegatorAddress")
    delegated_to: list[DelegatedTo] = Field(default_factory=list, alias="delegatedTo")
    total: str = ""
