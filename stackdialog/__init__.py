"""stackdialog - 턴 단위로 영속되는 대화 스택 엔진 + 선택지 인식"""

__version__ = "0.1.0a0"
