"""
Scoring Service
Compares submitted answers against stored correct answers
"""
from numbers import Number


def answers_match(selected, correct):
    """
    Strict value equality between a submitted and a stored answer

    Booleans never equal numbers (True != 1), numbers compare by value
    (1 == 1.0), everything else needs the same type and equal value.
    A question without a stored answer never matches.
    """
    if correct is None:
        return False
    if isinstance(selected, bool) or isinstance(correct, bool):
        return type(selected) is type(correct) and selected == correct
    if isinstance(selected, Number) and isinstance(correct, Number):
        return selected == correct
    return type(selected) is type(correct) and selected == correct


class ScoringService:
    """Service for scoring answers"""

    @staticmethod
    def find_question(questions, answer):
        """
        Look up the question an answer refers to

        Identifier match first; otherwise exact prompt equality against
        questionText (or questionId when no text was sent). With duplicate
        prompts the first question in order wins.
        """
        ref = answer.get('questionId')
        if ref not in (None, ''):
            for question in questions:
                if question.id is not None and str(question.id) == str(ref):
                    return question

        text = answer.get('questionText')
        if text in (None, ''):
            text = ref
        if isinstance(text, str) and text:
            for question in questions:
                if question.prompt == text:
                    return question
        return None

    @staticmethod
    def score(questions, answers):
        """
        Score a submission

        Args:
            questions: ordered questions of the assessment
            answers: list of {questionId, questionText?, selected}

        Returns:
            tuple: (annotated answers, total score)
        """
        annotated = []
        total = 0
        for answer in answers or []:
            if not isinstance(answer, dict):
                answer = {}
            selected = answer.get('selected')
            question = ScoringService.find_question(questions, answer)
            correct = question is not None and answers_match(selected, question.correct_answer)
            if correct:
                total += 1
            annotated.append({
                'questionId': answer.get('questionId'),
                'selected': selected,
                'correct': correct,
            })
        return annotated, total
