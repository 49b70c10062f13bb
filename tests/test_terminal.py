from dmgs.utils.terminal import OutputProcessor


def test_complete_lines_pass_through():
    processor = OutputProcessor()
    assert processor.process("one\ntwo\n") == "one\ntwo\n"
    assert processor.flush() == ""


def test_partial_lines_are_buffered():
    processor = OutputProcessor()
    assert processor.process("created: /out/") == ""
    assert processor.process("TestApp.dmg\nnext") == "created: /out/TestApp.dmg\n"
    assert processor.flush() == "next\n"


def test_carriage_return_overwrites():
    processor = OutputProcessor()
    output = processor.process("Progress 10%\rProgress 50%\rProgress 100%\n")
    assert output == "Progress 100%\n"


def test_carriage_return_across_chunks():
    processor = OutputProcessor()
    processor.process("....10....")
    processor.process("\r....20....")
    assert processor.process("\n") == "....20....\n"


def test_crlf_is_a_newline():
    processor = OutputProcessor()
    assert processor.process("line\r\n") == "line\n"


def test_backspace():
    processor = OutputProcessor()
    assert processor.process("ab\bc\n") == "ac\n"
