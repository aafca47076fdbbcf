from quiznight import db, bcrypt
from flask_login import UserMixin
from quiznight.services.live.questions import QuestionType


class Admin(UserMixin, db.Model):
    __tablename__ = 'admin'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class Quiz(db.Model):
    __tablename__ = 'quiz'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(128), nullable=False)
    questions = db.relationship('Question', back_populates='quiz', order_by='Question.order',
                                cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'question_count': len(self.questions),
        }


class Question(db.Model):
    __tablename__ = 'question'
    __table_args__ = (db.UniqueConstraint('quiz_id', 'order', name='uq_question_quiz_order'),)
    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey('quiz.id'), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    # 1-based position within the quiz; live sessions walk this in order
    order = db.Column(db.Integer, nullable=False)
    type = db.Column(db.String(32), nullable=False, default=QuestionType.MULTIPLE_CHOICE.value)
    image_url = db.Column(db.String(512), nullable=True)
    # Range questions only
    min_value = db.Column(db.Float, nullable=True)
    max_value = db.Column(db.Float, nullable=True)
    correct_value = db.Column(db.Float, nullable=True)
    quiz = db.relationship('Quiz', back_populates='questions')
    options = db.relationship('Option', back_populates='question', cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'quiz_id': self.quiz_id,
            'text': self.text,
            'order': self.order,
            'type': self.type,
            'image_url': self.image_url,
            'min_value': self.min_value,
            'max_value': self.max_value,
            'correct_value': self.correct_value,
            'options': [o.to_dict() for o in self.options],
        }


class Option(db.Model):
    __tablename__ = 'option'
    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False, index=True)
    text = db.Column(db.String(256), nullable=False)
    is_correct = db.Column(db.Boolean, default=False, nullable=False)
    question = db.relationship('Question', back_populates='options')

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
            'is_correct': self.is_correct,
        }
