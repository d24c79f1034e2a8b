"""
tagwalk.utils – Small shared utilities (path policy, plug-in loading).
"""
from .paths import combine_path_and_file, is_excluded, is_recursive_link

__all__ = ["combine_path_and_file", "is_excluded", "is_recursive_link"]
