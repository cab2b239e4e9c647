from decklens.parsers.decklist import COUNT_PREFIX_PATTERN, parse_decklist

__all__ = [
    "COUNT_PREFIX_PATTERN",
    "parse_decklist",
]
