# statlearn/pipeline/parallel/types.py
from enum import Enum


class ParallelKind(str, Enum):
    CV_FOLD = "cv_fold"
    KMEANS_RESTART = "kmeans_restart"
