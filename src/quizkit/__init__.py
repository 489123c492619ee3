"""Self-graded multiple-choice quizzes from question and answer documents."""
