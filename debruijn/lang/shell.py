"""Handles interactive/command-line mode for the debruijn interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Nameless lambda calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "λ> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "λ> "      # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Parses, converts and reduces an arbitrary λ-term."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line}\n{line}")

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                try:
                    self.sess.add(line, self.line_num)
                except ValueError:
                    return  # if line is empty, terminate

                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop().report(self.sess.show_tree))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the debruijn interpreter!\n\n"
              "Type a λ-term and it is parsed, converted to De Bruijn indices and reduced to \n"
              "normal form. Abstractions are written 'λx body', applications '(f a)' with \n"
              "exactly two terms inside the parentheses.\n\n"
              "Try it out by typing '(λx x y)'. The identity is applied to the free variable \n"
              "'y', and the nameless normal form is printed.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
