"""
Preprocessing module for turning raw text into index terms.
Includes tokenization, lowercase conversion, diacritics removal, stemming and stop word filtering.
"""
