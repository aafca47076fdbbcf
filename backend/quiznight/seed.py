from quiznight import db
from quiznight.models import Admin, Quiz, Question, Option


DEMO_QUESTIONS = [
    {
        'text': 'Which planet is known as the Red Planet?',
        'type': 'MULTIPLE_CHOICE',
        'options': [('Venus', False), ('Mars', True), ('Jupiter', False), ('Mercury', False)],
    },
    {
        'text': 'Is the Great Wall of China visible from the Moon with the naked eye?',
        'type': 'YES_NO',
        'options': [('Yes', False), ('No', True)],
    },
    {
        'text': 'In what year did the first person walk on the Moon?',
        'type': 'RANGE',
        'min_value': 1900,
        'max_value': 2000,
        'correct_value': 1969,
    },
]


def create_quiz(title, questions):
    """Create a quiz from plain dicts, numbering questions from 1 in list order."""
    quiz = Quiz(title=title)
    db.session.add(quiz)
    for position, spec in enumerate(questions, start=1):
        question = Question(
            quiz=quiz,
            text=spec['text'],
            order=spec.get('order', position),
            type=spec.get('type', 'MULTIPLE_CHOICE'),
            image_url=spec.get('image_url'),
            min_value=spec.get('min_value'),
            max_value=spec.get('max_value'),
            correct_value=spec.get('correct_value'),
        )
        for text, is_correct in spec.get('options', []):
            question.options.append(Option(text=text, is_correct=is_correct))
        db.session.add(question)
    db.session.commit()
    return quiz


def seed_demo_data(username='admin', password='password'):
    admin = Admin(username=username)
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    return create_quiz('Demo Night', DEMO_QUESTIONS)
