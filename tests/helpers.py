"""Sample documents and builders shared by the test modules."""

from funscript.models import ActionPoint, FunscriptDocument

OFS_DOCUMENT = {
    "version": "1.0",
    "inverted": False,
    "range": 100,
    "actions": [
        {"pos": 15, "at": 218703},
        {"pos": 85, "at": 219036},
        {"pos": 10, "at": 219402},
        {"pos": 90, "at": 219770},
        {"pos": 20, "at": 220105},
    ],
    "metadata": {
        "bookmarks": [],
        "chapters": [],
        "creator": "someone",
        "description": "",
        "duration": 2610,
        "license": "None",
        "notes": "",
        "performers": [],
        "script_url": "",
        "tags": ["slow"],
        "title": "example",
        "type": "basic",
        "video_url": "",
    },
}

JFS_DOCUMENT = {
    "version": "1.1",
    "inverted": False,
    "range": 100,
    "bookmark": 0,
    "lastPosition": 6388388382,
    "graphDuration": 10000,
    "speedRatio": 1.5,
    "injectionSpeed": 200,
    "injectionBias": 0.5,
    "scriptingMode": 0,
    "simulatorPresets": [
        {
            "name": "Default",
            "fullRange": True,
            "direction": 0,
            "rotation": 0.0,
            "length": 200.0,
            "width": 40.5,
            "offset": "0,0",
            "color": "#ff00aa",
        }
    ],
    "activeSimulator": 0,
    "reductionTolerance": 2.0,
    "reductionStretch": 1.0,
    "clips": [
        {"start": 1000, "end": 2500, "text": "intro", "style": {"bold": True, "size": 1.25}},
        None,
        "marker",
        [1, 2, 3],
    ],
    "actions": [
        {"pos": 0, "at": 0},
        {"pos": 100, "at": 500},
        {"pos": 0, "at": 1000},
    ],
    "rawActions": [
        {"pos": 0, "at": 0},
        {"pos": 50, "at": 250},
        {"pos": 100, "at": 500},
        {"pos": 0, "at": 1000},
    ],
}


def make_actions(pairs):
    """Build action points from ``(pos, at)`` pairs."""
    return [ActionPoint(pos=pos, at=at) for pos, at in pairs]


def make_document(pairs) -> FunscriptDocument:
    return FunscriptDocument(actions=make_actions(pairs), raw_actions=make_actions(pairs))
