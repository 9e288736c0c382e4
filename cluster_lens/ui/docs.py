"""Methodology tab content."""

import streamlit as st

import config


def render_methodology_tab() -> None:
    """Render the Methodology explanation tab."""
    st.markdown(f"""
## How Cluster-Lens Works

### 1. Cleaning the corpus

Each document is lowercased, URLs and digits are removed, and the text is split
into alphabetic tokens. Stopwords ({config.STOPWORD_LANGUAGE}, from NLTK) and
tokens shorter than {config.MIN_TOKEN_LENGTH} characters are dropped. The
remaining tokens are counted to build the word-frequency table.

### 2. Word embeddings

A **Word2Vec** model (gensim) is trained on the cleaned documents. Every word that
appears at least {config.W2V_MIN_COUNT} times gets a {config.W2V_VECTOR_SIZE}-dimensional
vector. Words used in similar contexts end up with similar vectors.

### 3. K-means and the elbow curve

Words are grouped with **k-means** (k-means++ initialization, best of
{config.KMEANS_N_INIT} restarts, fixed seed {config.KMEANS_SEED}). The elbow chart shows the
total within-cluster sum of squares for k = 1..{config.ELBOW_K_MAX}. Pick a k where the curve
stops dropping steeply.

Cluster numbers are arbitrary: cluster 2 at k=4 has nothing to do with cluster 2 at k=5.

### 4. PCA projection

The vectors are standardized per dimension and projected onto their first three
**principal components**. The sign of each axis is arbitrary, so the cloud may appear
mirrored compared to another tool; the layout of the words is otherwise the same.

### 5. Highlight and drill-down

Highlighting a cluster draws its words in a strong color and fades all other words
to {config.DIM_OPACITY:.0%} opacity, so the cluster stands out while keeping its
neighbourhood visible. Drill-down lists a cluster's words ranked by how often they
occur in the corpus.
""")
