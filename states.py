from aiogram.fsm.state import State, StatesGroup


class StudySetup(StatesGroup):
    answering = State()
