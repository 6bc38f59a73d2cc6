from contactbook.main import run

run()
