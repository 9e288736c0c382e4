"""
Cluster-Lens Configuration
Central configuration for paths, defaults, and settings.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent
DATA_DIR = Path(os.getenv("CLUSTER_LENS_DATA_DIR", PROJECT_ROOT / "data"))

# Default corpus paths
REVIEWS_CSV_PATH = DATA_DIR / "reviews.csv"
TEXT_CORPUS_DIR = DATA_DIR / "texts"

# Logging
LOG_LEVEL = os.getenv("CLUSTER_LENS_LOG_LEVEL", "INFO")

# Text cleaning settings
STOPWORD_LANGUAGE = "dutch"
MIN_TOKEN_LENGTH = 2
EXTRA_STOPWORDS: frozenset[str] = frozenset()

# Word2Vec settings
W2V_VECTOR_SIZE = 15
W2V_WINDOW = 5
W2V_EPOCHS = 20
W2V_MIN_COUNT = 2
W2V_SG = 0  # 0 = CBOW, 1 = skip-gram
W2V_WORKERS = 1  # vectors are only reproducible with a single worker
W2V_SEED = 42

# K-means settings
KMEANS_SEED = 42
KMEANS_N_INIT = 25
KMEANS_MIN_N_INIT = 10
KMEANS_MAX_ITER = 300
ELBOW_K_MAX = 10

# Cluster count slider range
CLUSTER_K_MIN = 2
CLUSTER_K_MAX = 10
DEFAULT_CLUSTER_COUNT = 4

# Projection settings
PCA_N_COMPONENTS = 3

# Visualization settings
PLOT_HEIGHT = 600
ELBOW_PLOT_HEIGHT = 320
HIGHLIGHT_COLOR = "#ef4444"
DIM_OPACITY = 0.1
OTHERS_LABEL = "Others"
ALL_CLUSTERS_LABEL = "All"
NO_HIGHLIGHT_LABEL = "None"
TOP_WORDS_LIMIT = 50

# Plotly's "Set2" + "Pastel1" qualitative palettes
CLUSTER_PALETTE = (
    "#66c2a5", "#fc8d62", "#8da0cb", "#e78ac3", "#a6d854",
    "#ffd92f", "#e5c494", "#b3b3b3", "#fbb4ae", "#b3cde3",
)

# Source identifiers for different corpora
SOURCE_REVIEWS = "reviews"
SOURCE_TEXT_FILES = "text_files"

# Corpus registry
AVAILABLE_CORPORA = {
    "reviews": {
        "loader": "reviews",
        "label": "Reviews",
        "description": "Customer reviews from a CSV file",
        "data_check": lambda: REVIEWS_CSV_PATH.exists(),
    },
    "text_files": {
        "loader": "text_files",
        "label": "Text files",
        "description": "One document per line across data/texts/*.txt",
        "data_check": lambda: TEXT_CORPUS_DIR.exists() and any(TEXT_CORPUS_DIR.glob("*.txt")),
    },
}

DEFAULT_CORPUS = os.getenv("CLUSTER_LENS_CORPUS", "reviews")
