# Utils package for the reservation backend

# ruff: noqa: F403
from .transaction_utils import *
