"""
Unit tests for the MIME message parser.
"""

from tests.utils.mail_builder import build_email


class TestParseMessage:
    """Tests for parse_message."""
    
    def test_plain_text_body(self):
        """Test that a text-only email yields body_text."""
        from lambdas.parse_email.message_parser import parse_message
        
        message = parse_message(build_email(text="Data at https://example.com/a.json"))
        
        assert message.body_text.strip() == "Data at https://example.com/a.json"
        assert message.body_html is None
        assert message.attachments == []
        assert message.parse_errors == []
    
    def test_alternative_bodies(self):
        """Test that text and HTML alternatives are both extracted."""
        from lambdas.parse_email.message_parser import parse_message
        
        message = parse_message(
            build_email(text="plain version", html="<p>html version</p>")
        )
        
        assert "plain version" in message.body_text
        assert "<p>html version</p>" in message.body_html
    
    def test_html_only_body(self):
        """Test that an HTML-only email leaves body_text empty."""
        from lambdas.parse_email.message_parser import parse_message
        
        message = parse_message(build_email(html="<a href=x>link</a>"))
        
        assert message.body_text is None
        assert "<a href=x>link</a>" in message.body_html
    
    def test_attachments_keep_order(self):
        """Test that attachments are returned in document order."""
        from lambdas.parse_email.message_parser import parse_message
        
        raw = build_email(
            text="two files",
            attachments=[
                ("first.json", b'{"n": 1}', "application/json"),
                ("second.json", b'{"n": 2}', "application/json"),
            ],
        )
        
        message = parse_message(raw)
        
        assert [a.filename for a in message.attachments] == ["first.json", "second.json"]
        assert message.attachments[0].content == b'{"n": 1}'
        assert message.attachments[0].content_type == "application/json"
        assert message.attachments[0].size_bytes == len(b'{"n": 1}')
    
    def test_headers_extracted(self):
        """Test that subject, sender and message ID are captured."""
        from lambdas.parse_email.message_parser import parse_message
        
        message = parse_message(build_email(text="x", subject="Report for June"))
        
        assert message.subject == "Report for June"
        assert message.from_address == "reports@example.com"
        assert message.message_id == "<report-001@mail.example.com>"
    
    def test_str_input_accepted(self):
        """Test that raw email given as str is parsed."""
        from lambdas.parse_email.message_parser import parse_message
        
        raw = "From: a@example.com\nSubject: s\nContent-Type: text/plain\n\nhello\n"
        
        message = parse_message(raw)
        
        assert message.body_text.strip() == "hello"
    
    def test_headers_only_email_has_no_body(self, email_without_body):
        """Test that an email without content records a parse error."""
        from lambdas.parse_email.message_parser import parse_message
        
        message = parse_message(email_without_body)
        
        assert not message.has_body
        assert message.attachments == []
        assert message.parse_errors == ["Could not extract email body"]


class TestExtractAddress:
    """Tests for _extract_address helper function."""
    
    def test_extract_from_angle_brackets(self):
        """Test extracting address from 'Name <email>' format."""
        from lambdas.parse_email.message_parser import _extract_address
        
        assert _extract_address("John Doe <john@example.com>") == "john@example.com"
    
    def test_extract_empty(self):
        """Test handling empty input."""
        from lambdas.parse_email.message_parser import _extract_address
        
        assert _extract_address("") == ""
        assert _extract_address(None) == ""
