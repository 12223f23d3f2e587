"""Calendar-independent core: dates, time scales, leap seconds, errors, config."""
