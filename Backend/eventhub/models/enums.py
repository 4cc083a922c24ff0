import enum


class EventFormat(str, enum.Enum):
    face_to_face = "face-to-face"
    online = "online"


class EventCategory(str, enum.Enum):
    music = "music"
    sports = "sports"
    art = "art"
    technology = "technology"
    education = "education"
    gastronomy = "gastronomy"
    leisure = "leisure"
    other = "other"


class AssistanceFormat(str, enum.Enum):
    face_to_face = "face-to-face"
    online = "online"


class FriendshipStatus(str, enum.Enum):
    requested = "requested"
    accepted = "accepted"
