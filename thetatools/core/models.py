"""Value shapes received from the on-demand API.

Only the contractually fixed fields are typed. Model inputs, outputs and
variable defaults stay plain JSON values.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class InferState:
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"

    TERMINAL = frozenset({SUCCESS, ERROR})


def _named_specs(raw: Any) -> Dict[str, Dict[str, Any]]:
    # wire sends either {name: spec} or [{"name": ..., ...}]
    out: Dict[str, Dict[str, Any]] = {}
    if isinstance(raw, dict):
        for name, spec in raw.items():
            out[str(name)] = spec if isinstance(spec, dict) else {}
    elif isinstance(raw, list):
        for i, spec in enumerate(raw):
            if not isinstance(spec, dict):
                continue
            out[str(spec.get("name") or i)] = spec
    return out


@dataclass
class InputVar:
    name: str
    type: str
    description: Optional[str] = None
    required: bool = False
    default: Any = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "InputVar":
        return cls(
            name=name,
            type=str(data.get("type") or ""),
            description=data.get("description"),
            required=bool(data.get("required", False)),
            default=data.get("default"),
        )


@dataclass
class OutputVar:
    name: str
    type: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "OutputVar":
        return cls(name=name, type=str(data.get("type") or ""), description=data.get("description"))


@dataclass
class Prediction:
    name: str
    instructions: Optional[str] = None
    cost: Optional[float] = None
    cost_divisor: Optional[float] = None
    func_type: Optional[str] = None
    rank: Optional[int] = None
    input_vars: Dict[str, InputVar] = field(default_factory=dict)
    output_vars: Dict[str, OutputVar] = field(default_factory=dict)
    variants: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "Prediction":
        variants = data.get("variants")
        return cls(
            name=name,
            instructions=data.get("instructions"),
            cost=data.get("cost"),
            cost_divisor=data.get("cost_divisor"),
            func_type=data.get("func_type"),
            rank=data.get("rank"),
            input_vars={n: InputVar.from_dict(n, s) for n, s in _named_specs(data.get("input_vars")).items()},
            output_vars={n: OutputVar.from_dict(n, s) for n, s in _named_specs(data.get("output_vars")).items()},
            variants=list(variants) if isinstance(variants, list) else None,
        )


@dataclass
class Service:
    id: str
    alias: str
    name: str
    state: str
    predictions: Dict[str, Prediction] = field(default_factory=dict)
    default_prediction: Optional[str] = None
    template_id: Optional[str] = None
    workload_type: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None

    @property
    def is_public(self) -> bool:
        return self.state == "public"

    def default(self) -> Optional[Prediction]:
        if not self.default_prediction:
            return None
        return self.predictions.get(self.default_prediction)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Service":
        preds = data.get("predictions") or {}
        return cls(
            id=str(data.get("id") or ""),
            alias=str(data.get("alias") or ""),
            name=str(data.get("name") or data.get("alias") or ""),
            state=str(data.get("state") or ""),
            predictions={
                str(n): Prediction.from_dict(str(n), p)
                for n, p in (preds.items() if isinstance(preds, dict) else [])
                if isinstance(p, dict)
            },
            default_prediction=data.get("default_prediction"),
            template_id=data.get("template_id"),
            workload_type=data.get("workload_type"),
            create_time=data.get("create_time"),
            update_time=data.get("update_time"),
        )


@dataclass
class Cost:
    input: float = 0
    output: float = 0

    @property
    def total(self) -> float:
        return self.input + self.output

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Cost"]:
        if not isinstance(data, dict):
            return None
        return cls(input=data.get("input") or 0, output=data.get("output") or 0)


@dataclass
class InferRequest:
    id: str
    state: str
    input: Dict[str, Any] = field(default_factory=dict)
    output: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    prediction: Optional[str] = None
    variant: Optional[str] = None
    cost: Optional[Cost] = None
    service_id: Optional[str] = None
    project_id: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in InferState.TERMINAL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InferRequest":
        output = data.get("output")
        return cls(
            id=str(data.get("id") or ""),
            state=str(data.get("state") or ""),
            input=data.get("input") or {},
            output=output if isinstance(output, dict) else None,
            error=data.get("error"),
            prediction=data.get("prediction"),
            variant=data.get("variant"),
            cost=Cost.from_dict(data.get("cost")),
            service_id=data.get("service_id"),
            project_id=data.get("project_id"),
            create_time=data.get("create_time"),
            update_time=data.get("update_time"),
        )


@dataclass
class UploadTarget:
    upload_url: str
    filename: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadTarget":
        return cls(upload_url=str(data.get("upload_url") or ""), filename=str(data.get("filename") or ""))


__all__ = [
    "InferState",
    "InputVar",
    "OutputVar",
    "Prediction",
    "Service",
    "Cost",
    "InferRequest",
    "UploadTarget",
]
