from .reporter import Reporter, arrival_digest, date_phrase, format_record
from .styles import Palette

__all__ = ["Palette", "Reporter", "arrival_digest", "date_phrase", "format_record"]
