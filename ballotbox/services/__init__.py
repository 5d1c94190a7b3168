from .catalog import count_options, list_options, seed_options
from .registry import count_voters, has_voted, register_if_absent
from .results import get_results
from .tally import increment, snapshot
from .vote import VoteReceipt, cast_vote, validate_option_id

__all__ = [
    # catalog
    "count_options",
    "list_options",
    "seed_options",
    # registry
    "count_voters",
    "has_voted",
    "register_if_absent",
    # tally
    "increment",
    "snapshot",
    # results
    "get_results",
    # vote
    "VoteReceipt",
    "cast_vote",
    "validate_option_id",
]
