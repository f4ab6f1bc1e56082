"""Example: driving the service layer directly (no UI).

Signs in as the seeded demo professor, opens a session, checks the demo
student in with its code and prints the professor's history.
"""

from rollcall.main import create_container


def main():
    container = create_container()

    professor = container.auth_service.sign_in("professor@example.edu", "professor123")
    session_id = container.session_manager.create_session("Discrete Mathematics", professor.user_id)
    session = container.sessions_repo.get_by_id(session_id)
    print(f"Session {session_id} code={session.code} started {session.started_label}")
    container.auth_service.sign_out()

    student = container.auth_service.sign_in("student@example.edu", "student123")
    result = container.checkin_workflow.check_in_current_user(session.code)
    print(student.email, result.outcome.value, result.message)
    container.auth_service.sign_out()

    container.session_manager.end_session(session_id)
    for row in container.history_aggregator.history_for(professor.user_id):
        print(row.date_label, row.course_name, row.student_name)


if __name__ == "__main__":
    main()
