"""
TF-IDF module: builds term-frequency and TF-IDF matrices over a corpus and
ranks documents against queries by dot product or cosine similarity.
"""
