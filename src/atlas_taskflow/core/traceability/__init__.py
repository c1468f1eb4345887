"""Rastreabilidade: serialização de Results/Runs e emissão de logs."""

from .logger import log_result
from .serializer import json_safe, result_to_dict, run_to_dict, save_run

__all__ = ["json_safe", "result_to_dict", "run_to_dict", "save_run", "log_result"]
