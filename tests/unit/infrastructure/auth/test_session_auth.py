from skillbridge.infrastructure.auth.session_auth import SessionTokenAuth

SIGN_IN_URL = "https://accounts.example.test/sign-in"


def test_authenticated_with_token(mock_ui):
    assert SessionTokenAuth("tok_123", SIGN_IN_URL, mock_ui).is_authenticated()
    assert SessionTokenAuth("0", SIGN_IN_URL, mock_ui).is_authenticated()

def test_not_authenticated_without_token(mock_ui):
    assert not SessionTokenAuth(None, SIGN_IN_URL, mock_ui).is_authenticated()
    assert not SessionTokenAuth("", SIGN_IN_URL, mock_ui).is_authenticated()

def test_redirect_warns_and_opens_sign_in_page(mocker, mock_ui):
    launch = mocker.patch("skillbridge.infrastructure.auth.session_auth.typer.launch")
    auth = SessionTokenAuth(None, SIGN_IN_URL, mock_ui)

    auth.redirect_to_sign_in()

    launch.assert_called_once_with(SIGN_IN_URL)
    mock_ui.display_warning.assert_called_once()
    assert SIGN_IN_URL in mock_ui.display_warning.call_args.args[0]
