from normalizer import course_level, course_number_value, parse_course_code


class TestParseCourseCode:
    def test_canonical(self):
        assert parse_course_code("ICS 111") == ("ICS", "111")

    def test_no_space(self):
        assert parse_course_code("ICS111") == ("ICS", "111")

    def test_hyphen(self):
        assert parse_course_code("MATH-241") == ("MATH", "241")

    def test_suffix_letter_uppercased(self):
        assert parse_course_code("ics 110p") == ("ics", "110P")

    def test_invalid_empty(self):
        assert parse_course_code("") is None
        assert parse_course_code(None) is None

    def test_keeps_prefix_case(self):
        assert parse_course_code("Busn 120") == ("Busn", "120")

    def test_placeholder_is_not_a_code(self):
        assert parse_course_code("Gen Ed Requirement") is None


class TestCourseLevel:
    def test_levels(self):
        assert course_level("111") == 100
        assert course_level("299") == 200
        assert course_level("310L") == 300
        assert course_level(499) == 400

    def test_outside_quota_range(self):
        assert course_level("699") is None
        assert course_level("90") is None
        assert course_level("TBA") is None
        assert course_level(None) is None

    def test_number_value(self):
        assert course_number_value("110P") == 110
        assert course_number_value("") is None
