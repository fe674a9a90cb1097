"""
Question model for LtQuiz.
Defines the Question class and loading of question files.
"""

import tomllib

from ..errors import QuizError


class Question:
    """
    Class representing one multiple-choice question with validation.
    """

    def __init__(self, description, answer, distractors=None, tags=None, id=None):
        """
        Initialize a new question.

        Args:
            description (str): The question text, may contain fenced code blocks
            answer (str): The correct answer
            distractors (list, optional): Wrong answers shown next to the right one
            tags (list, optional): Tags used for filtering
            id (int, optional): Database id, set once stored

        Raises:
            ValueError: If any of the required fields are invalid
        """
        self.description = description
        self.answer = answer
        self.distractors = distractors
        self.tags = tags
        self.id = id

    def __str__(self):
        tags_str = f" [{', '.join(self.tags)}]" if self.tags else ""
        return f"{self.id}. {self.description} -> {self.answer}{tags_str}"

    def __repr__(self):
        return (f"Question(id={self.id!r}, description={self.description!r}, "
                f"answer={self.answer!r}, distractors={self.distractors!r}, tags={self.tags!r})")

    def __eq__(self, other):
        if not isinstance(other, Question):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def description(self):
        return self._description

    @description.setter
    def description(self, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Question description cannot be empty")
        self._description = value

    @property
    def answer(self):
        return self._answer

    @answer.setter
    def answer(self, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Question answer cannot be empty")
        self._answer = value

    @property
    def distractors(self):
        return self._distractors

    @distractors.setter
    def distractors(self, value):
        if value is None:
            value = []
        if isinstance(value, str) or not all(isinstance(item, str) for item in value):
            raise ValueError("Distractors must be a list of strings")
        self._distractors = list(value)

    @property
    def tags(self):
        return self._tags

    @tags.setter
    def tags(self, value):
        if isinstance(value, str):
            # Comma-separated string, as accepted on the command line
            self._tags = [tag.strip() for tag in value.split(',') if tag.strip()]
        else:
            self._tags = [tag.strip() for tag in value if tag.strip()] if value else []

    def to_dict(self):
        """
        Convert the question to a dictionary.

        Returns:
            dict: Dictionary representation of the question
        """
        return {
            'id': self.id,
            'description': self.description,
            'answer': self.answer,
            'distractors': list(self.distractors),
            'tags': list(self.tags),
        }

    @classmethod
    def from_dict(cls, data):
        """
        Create a new Question from a dictionary.

        Args:
            data (dict): Dictionary containing question data

        Returns:
            Question: A new Question instance
        """
        try:
            return cls(
                description=data['description'],
                answer=data['answer'],
                distractors=data.get('distractors'),
                tags=data.get('tags'),
                id=data.get('id'),
            )
        except KeyError as e:
            raise ValueError(f"Question is missing required field {e}") from e


def parse_questions(text):
    """
    Parse questions from a TOML document.

    The document holds an array of ``[[questions]]`` tables.

    Args:
        text (str): TOML source

    Returns:
        list: Parsed Question objects

    Raises:
        QuizError: If the document is not valid TOML or a question is invalid
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise QuizError("parsing questions file") from e

    entries = data.get('questions', [])
    if not isinstance(entries, list):
        raise QuizError("'questions' must be an array of tables")

    questions = []
    for number, entry in enumerate(entries, start=1):
        try:
            questions.append(Question.from_dict(entry))
        except (ValueError, AttributeError, TypeError) as e:
            raise QuizError(f"invalid question #{number}") from e

    return questions
