from sitelift.command_run import run_pulumi_program

run_pulumi_program()
