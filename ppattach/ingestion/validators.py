# ppattach/ingestion/validators.py
from typing import List

from conllu.models import TokenList


class ValidationResult:
    """DTO for validation results."""

    def __init__(self, is_valid: bool, errors: List[str]):
        self.is_valid = is_valid
        self.errors = errors


class DataValidator:
    """
    Structural checks for a CoNLL-X sentence before it becomes a Sentence.
    The graph builder relies on them: heads are used as indices without checks.
    """

    @staticmethod
    def validate_sentence(token_list: TokenList) -> ValidationResult:
        errors = []
        n = len(token_list)

        for position, token in enumerate(token_list, 1):
            token_id = token['id']

            # 1. IDs are 1..n without gaps
            if token_id != position:
                errors.append(f"Token {position}: ID {token_id} out of sequence")
                continue

            # 2. Required fields
            if not token.get('form'):
                errors.append(f"Token {token_id}: empty FORM")

            # 3. Heads point into the sentence
            for column in ('head', 'phead'):
                head = token.get(column)
                if head is None:
                    continue
                if not 0 <= head <= n:
                    errors.append(f"Token {token_id}: {column.upper()} {head} refers to a missing token")
                elif head == token_id:
                    errors.append(f"Token {token_id}: {column.upper()} refers to the token itself")

        return ValidationResult(len(errors) == 0, errors)
