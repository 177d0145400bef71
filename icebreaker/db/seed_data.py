# icebreaker/db/seed_data.py
# Built-in question catalog: role -> [(category name, [questions])].
# "teacher" categories hold questions the teacher answers (asked by the student),
# "student" categories hold questions the student answers.

CATALOG = {
    "teacher": [
        ("About you", [
            "What did you want to be when you were a child?",
            "What is your favourite way to spend a weekend?",
            "Which food could you eat every day?",
            "What was the last thing that made you laugh out loud?",
            "Which place would you like to travel to next?",
        ]),
        ("Teaching", [
            "Why did you decide to become a teacher?",
            "What do you enjoy most about teaching?",
            "What is the most memorable thing a student ever said to you?",
            "How do you like to prepare for a lesson?",
            "Which subject were you worst at in school?",
        ]),
        ("Our time together", [
            "What do you hope we achieve together this term?",
            "How should I let you know when I am stuck?",
            "What is one thing you would like to learn from me?",
            "How do you like to receive feedback?",
        ]),
    ],
    "student": [
        ("About you", [
            "What are three words your friends would use to describe you?",
            "What is your favourite song right now?",
            "What do you usually do after school?",
            "Which animal are you most like, and why?",
            "What is something you are proud of?",
        ]),
        ("Studying", [
            "Which subject do you enjoy the most?",
            "When do you concentrate best, morning or night?",
            "What makes a lesson boring for you?",
            "What is the hardest part of studying for you?",
            "How do you reward yourself after finishing homework?",
        ]),
        ("Our time together", [
            "What would you like me to know about you before we start?",
            "What goal would you like to reach with my help?",
            "How can I make our lessons more fun?",
            "What should I do when you seem tired?",
        ]),
    ],
}
