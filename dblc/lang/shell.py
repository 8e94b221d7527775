"""Handles interactive/command-line mode for the dblc interpreter. Uses cmd as backend."""

import cmd

from dblc.lang.session import Session


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: De Bruijn backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.error_handler.fatal = False  # errors should not end the shell

        self.line_num = 0

    def default(self, line):
        """Registers a definition or reduces and prints a λ-term."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line = Session.preprocess_line(line)

            if not line:
                return
            elif "=" in line:
                self.sess.add(line, self.line_num)
            else:
                print(self.sess.show(self.sess.evaluate(line, self.line_num)), file=self.stdout)

    def do_defs(self, arg):
        """Lists all definitions of this session."""
        for name, term in self.sess.definitions.items():
            print(f"{name} = {self.sess.show(term)}", file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the dblc interpreter!\n\n"
              "Lambda calculus is a Turing-complete language created by Alonzo Church. This \n"
              "interpreter reduces terms to their normal form, in normal order.\n\n"
              "Try it out by typing 'ID = \\x.x'. This will bind the lambda term '\\x.x' to the \n"
              "name 'ID'. Next, try typing '(ID \\y.y)'. This will apply 'ID' to '\\y.y', giving \n"
              "'λa.a' as the result. Type 'defs' to list definitions and 'exit' to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter. cmd also routes definitions of EOF here, e.g. `EOF = \\x.x`."""
        if arg:
            return self.default(f"EOF {arg}")
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
