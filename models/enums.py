"""Enumerations for data source selection and list ordering."""

from enum import Enum


class DataSourceMode(str, Enum):
    REMOTE = "remote"
    MOCK = "mock"


class ChapterSort(str, Enum):
    OLDEST = "oldest"
    NEWEST = "newest"
