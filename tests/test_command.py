"""Tests for turning commands into argument vectors."""

from pathlib import Path

import pytest

from crusta.command import split, prepare_command


class TestSplit:
    def test_whitespace_runs(self):
        assert split('a  b\tc\n d') == ['a', 'b', 'c', 'd']

    def test_leading_and_trailing_whitespace(self):
        assert split('  ls -l  ') == ['ls', '-l']

    def test_double_quotes_keep_whitespace(self):
        assert split('echo "a b" c') == ['echo', 'a b', 'c']

    def test_single_quotes_keep_whitespace(self):
        assert split("echo 'a  b' c") == ['echo', 'a  b', 'c']

    def test_other_quote_is_literal_inside_span(self):
        assert split('''echo "it's" 'say "hi"' ''') == ['echo', "it's", 'say "hi"']

    def test_quoted_and_unquoted_text_join(self):
        assert split('--name="John Smith" a"b c"d') == ['--name=John Smith', 'ab cd']

    def test_empty_quotes_are_dropped(self):
        assert split('printf "" x') == ['printf', 'x']

    def test_unterminated_quote(self):
        with pytest.raises(ValueError, match='no closing quotation'):
            split('echo "abc')

    def test_empty(self):
        assert split('') == []
        assert split(' \t ') == []


class TestPrepareCommand:
    def test_string_and_list_agree(self):
        expected = ['ls', '-la', '/tmp']
        assert prepare_command('ls -la /tmp') == expected
        assert prepare_command(['ls', '-la', '/tmp']) == expected
        assert prepare_command(['ls -la', '/tmp']) == expected

    def test_quoted_substring(self):
        assert prepare_command('echo "a b" c') == ['echo', 'a b', 'c']

    def test_list_elements_are_split(self):
        assert prepare_command(['git commit', '-m "first commit"']) == ['git', 'commit', '-m', 'first commit']

    def test_nested_list_is_one_token(self):
        assert prepare_command(['echo', ['x', 'y']]) == ['echo', 'x y']

    def test_nested_list_is_not_resplit(self):
        assert prepare_command(['echo', ['"a', 'b"']]) == ['echo', '"a b"']

    def test_nested_tuple(self):
        assert prepare_command(('ls', ('My', 'Documents'))) == ['ls', 'My Documents']

    def test_path_is_one_token(self):
        assert prepare_command([Path('/opt/my tools/run'), 'x']) == ['/opt/my tools/run', 'x']

    def test_empty_nested_list_is_dropped(self):
        assert prepare_command(['true', []]) == ['true']

    @pytest.mark.parametrize('command', ['', '   ', [], ['', ' '], [[]]])
    def test_empty_command(self, command):
        with pytest.raises(ValueError, match='empty command'):
            prepare_command(command)

    def test_bad_element(self):
        with pytest.raises(TypeError):
            prepare_command(['sleep', 1])


class TestWrapShell:
    def test_string_is_passed_verbatim(self):
        command = 'echo "a  b" | tr a-z A-Z > out.txt'
        assert prepare_command(command, wrap_shell=True) == ['sh', '-c', command]

    def test_list_is_joined(self):
        assert prepare_command(['echo', ['a', 'b'], 'c'], wrap_shell=True) == ['sh', '-c', 'echo a b c']

    def test_named_shell(self):
        assert prepare_command('echo $0', wrap_shell='bash') == ['bash', '-c', 'echo $0']
        assert prepare_command('echo $0', wrap_shell='bash -c') == ['bash', '-c', 'echo $0']
        assert prepare_command('echo $0', wrap_shell='bash -e -c') == ['bash', '-e', '-c', 'echo $0']

    def test_false_does_not_wrap(self):
        assert prepare_command('echo $0', wrap_shell=False) == ['echo', '$0']

    def test_empty_command(self):
        with pytest.raises(ValueError):
            prepare_command('', wrap_shell=True)
