from typing import Dict, Iterator, List, Sequence, Tuple


class TermMatrix:
    """
    Term-by-document matrix.

    Rows follow the sorted vocabulary, columns follow corpus insertion order.
    Instances are not modified after construction; accessors return copies.
    """

    def __init__(self, terms: Sequence[str], document_names: Sequence[str], rows: Sequence[Sequence[float]]):
        """
        Args:
            terms: Row labels (the vocabulary)
            document_names: Column labels
            rows: One sequence of values per term, aligned to document_names
        """
        if len(rows) != len(terms):
            raise ValueError(f"Expected {len(terms)} rows, got {len(rows)}")

        self._terms = list(terms)
        self._document_names = list(document_names)
        self._rows = []
        for term, row in zip(self._terms, rows):
            if len(row) != len(self._document_names):
                raise ValueError(
                    f"Row '{term}' has {len(row)} values for {len(self._document_names)} documents"
                )
            self._rows.append(list(row))

        self._term_index = {term: i for i, term in enumerate(self._terms)}
        self._doc_index = {name: j for j, name in enumerate(self._document_names)}

    @property
    def terms(self) -> List[str]:
        return list(self._terms)

    @property
    def document_names(self) -> List[str]:
        return list(self._document_names)

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self._terms), len(self._document_names)

    @property
    def is_empty(self) -> bool:
        return not self._terms

    def rows(self) -> Iterator[Tuple[str, List[float]]]:
        """Iterate over (term, values) pairs in vocabulary order."""
        for term, row in zip(self._terms, self._rows):
            yield term, list(row)

    def value(self, term: str, document_name: str) -> float:
        """Entry for (term, document); 0.0 for a term outside the vocabulary."""
        j = self._doc_index[document_name]
        i = self._term_index.get(term)
        if i is None:
            return 0.0
        return self._rows[i][j]

    def column(self, document_name: str) -> Dict[str, float]:
        """
        Sparse view of one document's column.

        Args:
            document_name: Column label

        Returns:
            Dictionary {term: value} holding only the nonzero entries
        """
        j = self._doc_index[document_name]
        return {term: row[j] for term, row in zip(self._terms, self._rows) if row[j] > 0}

    def to_rows(self) -> List[list]:
        """Table form: one ``[term, value, value, ...]`` list per row."""
        return [[term] + list(row) for term, row in zip(self._terms, self._rows)]

    def to_dict(self) -> dict:
        return {
            "documents": list(self._document_names),
            "rows": [{"term": term, "values": list(row)} for term, row in zip(self._terms, self._rows)],
        }

    def __contains__(self, term) -> bool:
        return term in self._term_index

    def __len__(self) -> int:
        return len(self._terms)

    def __eq__(self, other):
        if not isinstance(other, TermMatrix):
            return NotImplemented
        return (self._terms == other._terms
                and self._document_names == other._document_names
                and self._rows == other._rows)

    def __repr__(self):
        return f"TermMatrix({len(self._terms)} terms x {len(self._document_names)} documents)"
