"""Canned pw-dump output shared by the PipeWire parsing and backend tests."""


def _node(oid, name, desc, media_class):
    props = {"node.name": name, "media.class": media_class}
    if desc:
        props["node.description"] = desc
    return {"id": oid, "type": "PipeWire:Interface:Node", "info": {"props": props}}


def _port(oid, node_id, name, direction, monitor=False, with_prop_direction=True):
    props = {"port.name": name, "node.id": node_id}
    if with_prop_direction:
        props["port.direction"] = "in" if direction == "input" else "out"
    if monitor:
        props["port.monitor"] = True
    return {"id": oid, "type": "PipeWire:Interface:Port", "info": {"direction": direction, "props": props}}


PW_DUMP = [
    {"id": 0, "type": "PipeWire:Interface:Core", "info": {"name": "pipewire-0"}},
    {
        "id": 40,
        "type": "PipeWire:Interface:Metadata",
        "props": {"metadata.name": "default"},
        "metadata": [
            {"subject": 0, "key": "default.audio.sink", "type": "Spa:String:JSON",
             "value": {"name": "alsa_output.usb-dac"}},
            {"subject": 0, "key": "default.audio.source", "type": "Spa:String:JSON",
             "value": "{\"name\": \"alsa_input.builtin\"}"},
            {"subject": 0, "key": "default.configured.audio.sink", "type": "Spa:String:JSON",
             "value": {"name": "alsa_output.builtin"}},
        ],
    },
    {
        "id": 41,
        "type": "PipeWire:Interface:Metadata",
        "props": {"metadata.name": "settings"},
        "metadata": [{"subject": 0, "key": "default.audio.sink", "value": {"name": "bogus"}}],
    },
    _node(50, "alsa_output.builtin", "Built-in Audio Analog Stereo", "Audio/Sink"),
    _node(51, "alsa_input.builtin", "Built-in Audio Microphone", "Audio/Source"),
    _node(52, "alsa_output.usb-dac", "USB DAC", "Audio/Sink"),
    _node(53, "bluez.headset", "Headset", "Audio/Duplex"),
    _node(60, "firefox", "Firefox", "Stream/Output/Audio"),
    _node(61, "", "", "Audio/Sink"),
    _port(100, 50, "playback_FL", "input"),
    _port(101, 50, "playback_FR", "input"),
    _port(102, 50, "monitor_FL", "output", monitor=True),
    _port(103, 50, "monitor_FR", "output", monitor=True),
    _port(110, 51, "capture_MONO", "output"),
    _port(130, 53, "playback_MONO", "input", with_prop_direction=False),
    _port(131, 53, "capture_MONO", "output", with_prop_direction=False),
    _port(160, 60, "output_FL", "output"),
    "not-an-object",
]
