# pw_dump.py
from __future__ import annotations

import json
from typing import Any, Dict, List

from models import AudioNode
from pw_cli import pw_dump_json
from pw_types import PwGraph, PwPort


DEFAULT_METADATA_NAME = "default"
DEFAULT_SINK_KEY = "default.audio.sink"
DEFAULT_SOURCE_KEY = "default.audio.source"


def props_from_obj(obj: Dict[str, Any]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for src in (obj.get("props") or {}, (obj.get("info") or {}).get("props") or {}):
        if not isinstance(src, dict):
            continue
        for k, v in src.items():
            if v is None:
                vs = ""
            elif isinstance(v, bool):
                vs = "true" if v else "false"
            else:
                vs = str(v)
            out[str(k)] = vs
    return out


def node_media_class(pr: Dict[str, str]) -> str:
    return pr.get("media.class", "") or ""


def node_name(pr: Dict[str, str]) -> str:
    return pr.get("node.name", "") or ""


def node_desc(pr: Dict[str, str]) -> str:
    return pr.get("node.description") or pr.get("node.nick") or pr.get("node.name") or ""


def port_name(pr: Dict[str, str]) -> str:
    return pr.get("port.name", "") or ""


def port_direction(pr: Dict[str, str], info: Dict[str, Any]) -> str:
    d = (pr.get("port.direction") or "").strip().lower()
    if d in ("in", "out"):
        return d
    d2 = str(info.get("direction") or "").strip().lower() if isinstance(info, dict) else ""
    if d2 in ("in", "input"):
        return "in"
    if d2 in ("out", "output"):
        return "out"
    return ""


def port_is_monitor(pr: Dict[str, str]) -> bool:
    if pr.get("port.monitor", "").strip().lower() == "true":
        return True
    pname = port_name(pr)
    return pname.startswith("monitor_") or pname.startswith("monitor.")


def metadata_value_name(value: Any) -> str:
    """
    pw-dump reports metadata values either as an object or, on older
    PipeWire releases, as a JSON-encoded string: {"name": "alsa_output..."}.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return value.strip()
    if isinstance(value, dict):
        return str(value.get("name") or "").strip()
    return ""


def _object_id(obj: Dict[str, Any]) -> int:
    try:
        return int(obj.get("id"))
    except (TypeError, ValueError):
        return -1


def _objects_of_type(data: List[Any], suffix: str) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for obj in data:
        if not isinstance(obj, dict):
            continue
        if str(obj.get("type") or "").endswith(suffix):
            out.append(obj)
    return out


def parse_graph(data: List[Any]) -> PwGraph:
    nodes: Dict[int, AudioNode] = {}
    ports: Dict[int, PwPort] = {}
    defaults: Dict[str, str] = {}

    for obj in _objects_of_type(data, ":Node"):
        oid = _object_id(obj)
        if oid < 0:
            continue
        pr = props_from_obj(obj)
        nodes[oid] = AudioNode(
            id=oid,
            name=node_name(pr),
            description=node_desc(pr),
            media_class=node_media_class(pr),
            props=pr,
        )

    for obj in _objects_of_type(data, ":Port"):
        oid = _object_id(obj)
        if oid < 0:
            continue
        pr = props_from_obj(obj)
        info = obj.get("info") or {}

        try:
            nid = int(pr.get("node.id", "0"))
        except ValueError:
            nid = 0

        ports[oid] = PwPort(
            id=oid,
            node_id=nid,
            direction=port_direction(pr, info),
            monitor=port_is_monitor(pr),
        )

    for obj in _objects_of_type(data, ":Metadata"):
        pr = props_from_obj(obj)
        if pr.get("metadata.name") != DEFAULT_METADATA_NAME:
            continue
        for entry in obj.get("metadata") or []:
            if not isinstance(entry, dict):
                continue
            key = str(entry.get("key") or "")
            if key not in (DEFAULT_SINK_KEY, DEFAULT_SOURCE_KEY):
                continue
            name = metadata_value_name(entry.get("value"))
            if name:
                defaults[key] = name

    return PwGraph(nodes=nodes, ports=ports, defaults=defaults)


def dump_graph() -> PwGraph:
    return parse_graph(pw_dump_json())
