from .jsonwriter import write_json as write_json, read_json as read_json
from .constwriter import write_const as write_const
